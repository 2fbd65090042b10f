# PATH: ledger/api/views/periods.py

from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from ledger.api.serializers import PeriodQuerySerializer
from ledger.services.diagnostics import Diagnostics
from ledger.services.exceptions import LedgerServiceError
from ledger.services.period_resolver import PERIOD_TOKENS, period_from_request


class PeriodResolveView(APIView):
    """Resolve a period token (or explicit bounds) to inclusive dates."""

    permission_classes = [AllowAny]

    @extend_schema(
        tags=["ledger"],
        parameters=[
            OpenApiParameter(
                name="period",
                type=str,
                location=OpenApiParameter.QUERY,
                required=False,
                description=f"One of {', '.join(PERIOD_TOKENS)}. Unknown tokens resolve to all_time.",
            ),
            OpenApiParameter(
                name="start_date",
                type=OpenApiTypes.DATE,
                required=False,
                description="Explicit start (YYYY-MM-DD). Requires end_date; overrides period.",
            ),
            OpenApiParameter(
                name="end_date",
                type=OpenApiTypes.DATE,
                required=False,
                description="Explicit end (YYYY-MM-DD). Requires start_date.",
            ),
            OpenApiParameter(
                name="today",
                type=OpenApiTypes.DATE,
                required=False,
                description="Pin 'now' for resolution. Defaults to the local date.",
            ),
        ],
        responses={200: dict, 400: dict},
    )
    def get(self, request):
        serializer = PeriodQuerySerializer(data=request.query_params)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        diagnostics = Diagnostics()
        try:
            period = period_from_request(
                data.get("period"),
                data.get("start_date"),
                data.get("end_date"),
                now=data.get("today"),
                diagnostics=diagnostics,
            )
        except LedgerServiceError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(
            {**period.as_dict(), "diagnostics": diagnostics.as_list()},
            status=status.HTTP_200_OK,
        )
