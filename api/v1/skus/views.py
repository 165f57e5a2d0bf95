"""
Sku catalog API views.

Any resolved role may read the catalog; changes require license-admin
or admin.
"""

from asgiref.sync import async_to_sync
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from api.permissions import HasApiRole, IsElevatedRole
from api.responses import invalid_body_response, result_response
from api.serializers import PageQuerySerializer, page_payload
from api.v1.services import sku_catalog
from api.v1.skus.serializers import CreateSkuRequestSerializer, SkuSerializer, UpdateSkuRequestSerializer
from core.instrumentation import Status, StatusCode, get_tracer

tracer = get_tracer(__name__)


def _sku_body(sku):
    return SkuSerializer(sku).data


class _ReadOrElevated:
    """Reads need any role, writes need an elevated role."""

    def get_permissions(self):
        if self.request.method in ("GET", "HEAD", "OPTIONS"):
            return [HasApiRole()]
        return [IsElevatedRole()]


class SkuListView(_ReadOrElevated, APIView):
    """View for listing and adding skus."""

    @extend_schema(
        operation_id="list_skus",
        summary="List Skus",
        tags=["Skus"],
        parameters=[
            OpenApiParameter(name="offset", type=int, required=False),
            OpenApiParameter(name="limit", type=int, required=False),
        ],
        responses={200: SkuSerializer(many=True)},
    )
    def get(self, request: Request) -> Response:
        """List skus ordered by code."""
        return async_to_sync(self._handle_list)(request)

    async def _handle_list(self, request: Request) -> Response:
        with tracer.start_as_current_span("list_skus"):
            query = PageQuerySerializer(data=request.query_params)
            if not query.is_valid():
                return invalid_body_response(query.errors)
            result = await sku_catalog().list_skus(query.to_page_request())
            return result_response(result, lambda page: page_payload(page, SkuSerializer))

    @extend_schema(
        operation_id="create_sku",
        summary="Create Sku",
        tags=["Skus"],
        request=CreateSkuRequestSerializer,
        responses={201: SkuSerializer, 400: {"description": "Bad Request"}, 409: {"description": "Already exists"}},
    )
    def post(self, request: Request) -> Response:
        """Add a sku."""
        return async_to_sync(self._handle_create)(request)

    async def _handle_create(self, request: Request) -> Response:
        with tracer.start_as_current_span("create_sku") as span:
            serializer = CreateSkuRequestSerializer(data=request.data)
            if not serializer.is_valid():
                span.set_status(Status(StatusCode.ERROR, "Validation failed"))
                return invalid_body_response(serializer.errors)
            span.set_attribute("sku.code", serializer.validated_data["code"])
            result = await sku_catalog().add_sku(**serializer.validated_data)
            return result_response(result, _sku_body, success_status=status.HTTP_201_CREATED)


class SkuDetailView(_ReadOrElevated, APIView):
    """View for reading, updating and deleting a sku by code."""

    @extend_schema(operation_id="get_sku", summary="Get Sku", tags=["Skus"], responses={200: SkuSerializer})
    def get(self, request: Request, code: str) -> Response:
        """Get a sku by code."""
        return async_to_sync(self._handle_get)(code)

    async def _handle_get(self, code: str) -> Response:
        with tracer.start_as_current_span("get_sku") as span:
            span.set_attribute("sku.code", code)
            return result_response(await sku_catalog().get_by_code(code), _sku_body)

    @extend_schema(
        operation_id="update_sku",
        summary="Update Sku",
        tags=["Skus"],
        request=UpdateSkuRequestSerializer,
        responses={200: SkuSerializer},
    )
    def put(self, request: Request, code: str) -> Response:
        """Update a sku."""
        return async_to_sync(self._handle_update)(request, code)

    def patch(self, request: Request, code: str) -> Response:
        """Update a sku."""
        return async_to_sync(self._handle_update)(request, code)

    async def _handle_update(self, request: Request, code: str) -> Response:
        with tracer.start_as_current_span("update_sku") as span:
            span.set_attribute("sku.code", code)
            serializer = UpdateSkuRequestSerializer(data=request.data)
            if not serializer.is_valid():
                return invalid_body_response(serializer.errors)
            result = await sku_catalog().update_sku(code, **serializer.validated_data)
            return result_response(result, _sku_body)

    @extend_schema(operation_id="delete_sku", summary="Delete Sku", tags=["Skus"], responses={200: SkuSerializer})
    def delete(self, request: Request, code: str) -> Response:
        """Delete a sku."""
        return async_to_sync(self._handle_delete)(code)

    async def _handle_delete(self, code: str) -> Response:
        with tracer.start_as_current_span("delete_sku") as span:
            span.set_attribute("sku.code", code)
            return result_response(await sku_catalog().delete_sku(code), _sku_body)


class SkuByNameView(APIView):
    """View for looking up a sku by display name."""

    permission_classes = [HasApiRole]

    @extend_schema(operation_id="get_sku_by_name", summary="Get Sku By Name", tags=["Skus"], responses={200: SkuSerializer})
    def get(self, request: Request, name: str) -> Response:
        """Get a sku by name."""
        return async_to_sync(self._handle_get)(name)

    async def _handle_get(self, name: str) -> Response:
        with tracer.start_as_current_span("get_sku_by_name"):
            return result_response(await sku_catalog().get_by_name(name), _sku_body)
