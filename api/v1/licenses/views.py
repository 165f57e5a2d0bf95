"""
License API views.

Issue, read, update and delete license records, and validate tokens.
Every endpoint accepts any resolved role.
"""

from asgiref.sync import async_to_sync
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from api.permissions import HasApiRole
from api.responses import invalid_body_response, result_response
from api.serializers import PageQuerySerializer, page_payload
from api.v1.licenses.serializers import (
    IssueLicenseRequestSerializer,
    LicenseDetailsSerializer,
    LicenseRecordSerializer,
    TokenValidationSerializer,
    UpdateLicenseRequestSerializer,
    ValidateTokenRequestSerializer,
)
from api.v1.services import license_service
from core.instrumentation import Status, StatusCode, get_tracer
from licenses.application.commands.issue_license import IssueLicenseCommand
from licenses.application.commands.update_license import UpdateLicenseCommand

tracer = get_tracer(__name__)

PAGE_PARAMETERS = [
    OpenApiParameter(name="offset", type=int, required=False, description="Rows to skip"),
    OpenApiParameter(name="limit", type=int, required=False, description="Rows to return (max 1000)"),
]


def _record_body(record):
    return LicenseRecordSerializer(record).data


def _details_body(details):
    return LicenseDetailsSerializer(details).data


def _details_page_body(page):
    return page_payload(page, LicenseDetailsSerializer)


class LicenseListView(APIView):
    """View for listing and issuing licenses."""

    permission_classes = [HasApiRole]

    @extend_schema(
        operation_id="list_licenses",
        summary="List Licenses",
        description="List licenses oldest first, joined with customer names.",
        tags=["Licenses"],
        parameters=PAGE_PARAMETERS,
        responses={200: LicenseDetailsSerializer(many=True)},
    )
    def get(self, request: Request) -> Response:
        """List licenses."""
        return async_to_sync(self._handle_list)(request)

    async def _handle_list(self, request: Request) -> Response:
        with tracer.start_as_current_span("list_licenses"):
            query = PageQuerySerializer(data=request.query_params)
            if not query.is_valid():
                return invalid_body_response(query.errors)
            result = await license_service().list_licenses(query.to_page_request())
            return result_response(result, _details_page_body)

    @extend_schema(
        operation_id="issue_license",
        summary="Issue License",
        description=(
            "Validate the requested features against the sku catalog, sign a token "
            "with the given key, verify it and store the license."
        ),
        tags=["Licenses"],
        request=IssueLicenseRequestSerializer,
        responses={
            201: LicenseRecordSerializer,
            400: {"description": "Bad Request"},
            500: {"description": "Issued token failed self-verification"},
        },
    )
    def post(self, request: Request) -> Response:
        """Issue a license."""
        return async_to_sync(self._handle_issue)(request)

    async def _handle_issue(self, request: Request) -> Response:
        with tracer.start_as_current_span("issue_license") as span:
            serializer = IssueLicenseRequestSerializer(data=request.data)
            if not serializer.is_valid():
                span.set_attribute("error", "validation_failed")
                span.set_status(Status(StatusCode.ERROR, "Validation failed"))
                return invalid_body_response(serializer.errors)

            data = serializer.validated_data
            span.set_attribute("key.id", data["key_id"])
            span.set_attribute("customer.id", data["customer_id"])

            command = IssueLicenseCommand(
                key_id=data["key_id"],
                issued_by=data["issued_by"],
                customer_id=data["customer_id"],
                label=data["label"],
                description=data.get("description"),
                features=serializer.features_as_grants(),
            )
            result = await license_service().issue_license(command)
            if result.is_ok:
                span.set_attribute("license.id", result.value.id)
                span.set_status(Status(StatusCode.OK))
            else:
                span.set_status(Status(StatusCode.ERROR, result.message))
            return result_response(result, _record_body, success_status=status.HTTP_201_CREATED)


class LicenseDetailView(APIView):
    """View for reading, updating and deleting a license."""

    permission_classes = [HasApiRole]

    @extend_schema(
        operation_id="get_license",
        summary="Get License",
        tags=["Licenses"],
        responses={200: LicenseDetailsSerializer, 404: {"description": "License not found"}},
    )
    def get(self, request: Request, license_id: str) -> Response:
        """Get a license."""
        return async_to_sync(self._handle_get)(license_id)

    async def _handle_get(self, license_id: str) -> Response:
        with tracer.start_as_current_span("get_license") as span:
            span.set_attribute("license.id", license_id)
            return result_response(await license_service().get_license_by_id(license_id), _details_body)

    @extend_schema(
        operation_id="update_license",
        summary="Update License",
        description="Change label and description. The token never changes.",
        tags=["Licenses"],
        request=UpdateLicenseRequestSerializer,
        responses={200: LicenseRecordSerializer},
    )
    def put(self, request: Request, license_id: str) -> Response:
        """Update license metadata."""
        return async_to_sync(self._handle_update)(request, license_id)

    def patch(self, request: Request, license_id: str) -> Response:
        """Update license metadata."""
        return async_to_sync(self._handle_update)(request, license_id)

    async def _handle_update(self, request: Request, license_id: str) -> Response:
        with tracer.start_as_current_span("update_license") as span:
            span.set_attribute("license.id", license_id)
            serializer = UpdateLicenseRequestSerializer(data=request.data)
            if not serializer.is_valid():
                return invalid_body_response(serializer.errors)
            result = await license_service().update_license(
                license_id, UpdateLicenseCommand(**serializer.validated_data)
            )
            return result_response(result, _record_body)

    @extend_schema(
        operation_id="delete_license",
        summary="Delete License",
        description="Delete a license record. Distributed copies of the token stay valid.",
        tags=["Licenses"],
        responses={200: LicenseRecordSerializer},
    )
    def delete(self, request: Request, license_id: str) -> Response:
        """Delete a license."""
        return async_to_sync(self._handle_delete)(license_id)

    async def _handle_delete(self, license_id: str) -> Response:
        with tracer.start_as_current_span("delete_license") as span:
            span.set_attribute("license.id", license_id)
            return result_response(await license_service().delete_license(license_id), _record_body)


class CustomerLicenseListView(APIView):
    """View for listing one customer's licenses."""

    permission_classes = [HasApiRole]

    @extend_schema(
        operation_id="list_customer_licenses",
        summary="List Customer Licenses",
        tags=["Licenses"],
        parameters=PAGE_PARAMETERS,
        responses={200: LicenseDetailsSerializer(many=True)},
    )
    def get(self, request: Request, customer_id: str) -> Response:
        """List licenses of a customer."""
        return async_to_sync(self._handle_list)(request, customer_id)

    async def _handle_list(self, request: Request, customer_id: str) -> Response:
        with tracer.start_as_current_span("list_customer_licenses") as span:
            span.set_attribute("customer.id", customer_id)
            query = PageQuerySerializer(data=request.query_params)
            if not query.is_valid():
                return invalid_body_response(query.errors)
            result = await license_service().list_licenses_by_customer(customer_id, query.to_page_request())
            return result_response(result, _details_page_body)


class ValidateTokenView(APIView):
    """View for validating a license token."""

    permission_classes = [HasApiRole]

    @extend_schema(
        operation_id="validate_token",
        summary="Validate Token",
        description=(
            "Verify the token signature against the key named by its kid, check expiry "
            "and the features claim. An invalid token is reported in the body, not as an error."
        ),
        tags=["Licenses"],
        request=ValidateTokenRequestSerializer,
        responses={200: TokenValidationSerializer},
    )
    def post(self, request: Request) -> Response:
        """Validate a token."""
        return async_to_sync(self._handle_validate)(request)

    async def _handle_validate(self, request: Request) -> Response:
        with tracer.start_as_current_span("validate_token") as span:
            serializer = ValidateTokenRequestSerializer(data=request.data)
            if not serializer.is_valid():
                return invalid_body_response(serializer.errors)
            result = await license_service().validate_token(serializer.validated_data["token"])
            if result.is_ok:
                span.set_attribute("token.valid", result.value.is_valid)
            return result_response(result, lambda validation: TokenValidationSerializer(validation).data)
