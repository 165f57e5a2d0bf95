"""
Key pair API views.

Any resolved role may list and read keys; the private key is redacted
unless the caller holds an elevated role. Generation, deletion and
private key download require license-admin or admin.
"""

from asgiref.sync import async_to_sync
from django.http import HttpResponse
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from api.permissions import HasApiRole, IsElevatedRole, request_role
from api.responses import error_response, invalid_body_response, result_response
from api.serializers import PageQuerySerializer, page_payload
from api.v1.keys.serializers import (
    GenerateKeyPairRequestSerializer,
    KeyPairSerializer,
    UpdateKeyPairRequestSerializer,
)
from api.v1.services import key_service
from core.instrumentation import Status, StatusCode, get_tracer
from keys.application.commands.generate_key_pair import GenerateKeyPairCommand
from keys.application.commands.update_key_pair import UpdateKeyPairCommand

tracer = get_tracer(__name__)

PAGE_PARAMETERS = [
    OpenApiParameter(name="offset", type=int, required=False, description="Rows to skip"),
    OpenApiParameter(name="limit", type=int, required=False, description="Rows to return (max 1000)"),
]


def _redact_for(request: Request) -> bool:
    return not request_role(request).is_elevated


def _key_body(key_pair):
    return KeyPairSerializer(key_pair).data


class KeyListView(APIView):
    """View for listing and generating key pairs."""

    def get_permissions(self):
        if self.request.method == "POST":
            return [IsElevatedRole()]
        return [HasApiRole()]

    @extend_schema(
        operation_id="list_keys",
        summary="List Keys",
        description="List key pairs ordered by creation time.",
        tags=["Keys"],
        parameters=PAGE_PARAMETERS,
        responses={200: KeyPairSerializer(many=True)},
    )
    def get(self, request: Request) -> Response:
        """List key pairs."""
        return async_to_sync(self._handle_list)(request)

    async def _handle_list(self, request: Request) -> Response:
        with tracer.start_as_current_span("list_keys") as span:
            query = PageQuerySerializer(data=request.query_params)
            if not query.is_valid():
                span.set_status(Status(StatusCode.ERROR, "Validation failed"))
                return invalid_body_response(query.errors)

            result = await key_service().list_keys(query.to_page_request(), redact=_redact_for(request))
            if result.is_ok:
                span.set_attribute("keys.count", result.value.count)
            return result_response(result, lambda page: page_payload(page, KeyPairSerializer))

    @extend_schema(
        operation_id="generate_key",
        summary="Generate Key",
        description="Generate a new 2048-bit RSA key pair. The response carries the private key.",
        tags=["Keys"],
        request=GenerateKeyPairRequestSerializer,
        responses={
            201: KeyPairSerializer,
            400: {"description": "Bad Request"},
            403: {"description": "Forbidden - requires license-admin or admin"},
        },
    )
    def post(self, request: Request) -> Response:
        """Generate a key pair."""
        return async_to_sync(self._handle_generate)(request)

    async def _handle_generate(self, request: Request) -> Response:
        with tracer.start_as_current_span("generate_key") as span:
            serializer = GenerateKeyPairRequestSerializer(data=request.data)
            if not serializer.is_valid():
                span.set_status(Status(StatusCode.ERROR, "Validation failed"))
                return invalid_body_response(serializer.errors)

            result = await key_service().generate_key_pair(GenerateKeyPairCommand(**serializer.validated_data))
            if result.is_ok:
                span.set_attribute("key.id", result.value.id)
                span.set_status(Status(StatusCode.OK))
            return result_response(result, _key_body, success_status=status.HTTP_201_CREATED)


class KeyDetailView(APIView):
    """View for reading, updating and deleting a key pair."""

    def get_permissions(self):
        if self.request.method == "DELETE":
            return [IsElevatedRole()]
        return [HasApiRole()]

    @extend_schema(
        operation_id="get_key",
        summary="Get Key",
        tags=["Keys"],
        responses={200: KeyPairSerializer, 404: {"description": "Key not found"}},
    )
    def get(self, request: Request, key_id: str) -> Response:
        """Get a key pair."""
        return async_to_sync(self._handle_get)(request, key_id)

    async def _handle_get(self, request: Request, key_id: str) -> Response:
        with tracer.start_as_current_span("get_key") as span:
            span.set_attribute("key.id", key_id)
            result = await key_service().get_by_id(key_id, redact=_redact_for(request))
            return result_response(result, _key_body)

    @extend_schema(
        operation_id="update_key",
        summary="Update Key",
        description="Change label and description. Key material never changes.",
        tags=["Keys"],
        request=UpdateKeyPairRequestSerializer,
        responses={200: KeyPairSerializer, 400: {"description": "Bad Request"}, 404: {"description": "Key not found"}},
    )
    def put(self, request: Request, key_id: str) -> Response:
        """Update key metadata."""
        return async_to_sync(self._handle_update)(request, key_id)

    def patch(self, request: Request, key_id: str) -> Response:
        """Update key metadata."""
        return async_to_sync(self._handle_update)(request, key_id)

    async def _handle_update(self, request: Request, key_id: str) -> Response:
        with tracer.start_as_current_span("update_key") as span:
            span.set_attribute("key.id", key_id)
            serializer = UpdateKeyPairRequestSerializer(data=request.data)
            if not serializer.is_valid():
                span.set_status(Status(StatusCode.ERROR, "Validation failed"))
                return invalid_body_response(serializer.errors)

            result = await key_service().update_metadata(
                key_id,
                UpdateKeyPairCommand(**serializer.validated_data),
                redact=_redact_for(request),
            )
            return result_response(result, _key_body)

    @extend_schema(
        operation_id="delete_key",
        summary="Delete Key",
        description="Delete a key pair permanently. Issued tokens are not revoked.",
        tags=["Keys"],
        responses={200: KeyPairSerializer, 404: {"description": "Key not found"}},
    )
    def delete(self, request: Request, key_id: str) -> Response:
        """Delete a key pair."""
        return async_to_sync(self._handle_delete)(request, key_id)

    async def _handle_delete(self, request: Request, key_id: str) -> Response:
        with tracer.start_as_current_span("delete_key") as span:
            span.set_attribute("key.id", key_id)
            result = await key_service().delete(key_id)
            return result_response(result, _key_body)


class _KeyDownloadView(APIView):
    """Serve one half of a key pair as a .pem attachment."""

    half = ""

    def _fetch(self, key_id: str):
        raise NotImplementedError

    def get(self, request: Request, key_id: str):
        """Download PEM text."""
        return async_to_sync(self._handle_download)(key_id)

    async def _handle_download(self, key_id: str):
        with tracer.start_as_current_span(f"download_{self.half}_key") as span:
            span.set_attribute("key.id", key_id)
            result = await self._fetch(key_id)
            if not result.is_ok:
                return error_response(result)
            response = HttpResponse(result.value, content_type="application/x-pem-file")
            response["Content-Disposition"] = f'attachment; filename="{key_id}.{self.half}.pem"'
            return response


class PublicKeyDownloadView(_KeyDownloadView):
    """Download the public key PEM."""

    permission_classes = [HasApiRole]
    half = "public"

    @extend_schema(operation_id="download_public_key", summary="Download Public Key", tags=["Keys"], responses={200: bytes})
    def get(self, request: Request, key_id: str):
        return super().get(request, key_id)

    async def _fetch(self, key_id: str):
        return await key_service().get_public_key_bytes(key_id)


class PrivateKeyDownloadView(_KeyDownloadView):
    """Download the private key PEM."""

    permission_classes = [IsElevatedRole]
    half = "private"

    @extend_schema(operation_id="download_private_key", summary="Download Private Key", tags=["Keys"], responses={200: bytes})
    def get(self, request: Request, key_id: str):
        return super().get(request, key_id)

    async def _fetch(self, key_id: str):
        return await key_service().get_private_key_bytes(key_id)
