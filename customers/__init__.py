"""
Customers module - customer records licenses are issued to.

Only the read side is used here: license listings left-join the
customer name.
"""
