"""
License Token Service Django project.
"""
