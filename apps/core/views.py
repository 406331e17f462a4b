from django.http import Http404
from rest_framework.response import Response
from rest_framework.viewsets import ReadOnlyModelViewSet
from rest_framework import status
import logging

logger = logging.getLogger(__name__)


class BaseResponseMixin:
    """
    Mixin to standardize API responses. Responses have the format:
    {
        "status": "success" | "error",
        "message": str,
        "data": Any | None
    }
    """

    def success_response(
        self, data=None, message="Success", status_code=status.HTTP_200_OK
    ):
        """Send a success response"""
        response_data = {
            "status": "success",
            "status_code": status_code,
            "message": message,
            "data": data,
        }
        return Response(response_data, status=status_code)

    def error_response(
        self,
        message="An error occurred",
        status_code=status.HTTP_400_BAD_REQUEST,
        data=None,
    ):
        """Send an error response"""
        response_data = {
            "status": "error",
            "message": message,
            "data": data,
            "status_code": status_code,
        }
        return Response(response_data, status=status_code)


class BaseReadOnlyViewSet(BaseResponseMixin, ReadOnlyModelViewSet):
    """
    Read-only ViewSet with the standardized response envelope on `list`
    and `retrieve`.
    """

    def list(self, request, *args, **kwargs):
        queryset = self.filter_queryset(self.get_queryset())
        page = self.paginate_queryset(queryset)

        if page is not None:
            serializer = self.get_serializer(page, many=True)
            return self.get_paginated_response(serializer.data)

        serializer = self.get_serializer(queryset, many=True)
        return self.success_response(
            data=serializer.data,
            message=f"{self.get_model_name()} list retrieved successfully",
        )

    def retrieve(self, request, *args, **kwargs):
        try:
            instance = self.get_object()
        except Http404:
            return self.error_response(
                message=f"{self.get_model_name()} not found",
                status_code=status.HTTP_404_NOT_FOUND,
            )
        serializer = self.get_serializer(instance)
        return self.success_response(
            data=serializer.data,
            message=f"{self.get_model_name()} retrieved successfully",
        )

    def get_model_name(self) -> str:
        """
        Helper method to get the model name for messages.
        """
        return self.__class__.__name__.replace("ViewSet", "")
