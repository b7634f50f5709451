"""Scaffold endpoint: random demo weather forecast for the next days.

GET /weatherforecast responds with a JSON array of FORECAST_DAYS records:

    [
        {"date": "2025-10-16", "temperatureC": 12, "temperatureF": 53, "summary": "Cool"},
        ...
    ]
"""

import random
import logging
from datetime import datetime, timedelta, UTC

from urlshortener.types import LambdaEvent, LambdaContext, LambdaResponse
from urlshortener.models import WeatherForecastModel
from urlshortener.utils.helpers import guarantee_500_response
from urlshortener.utils.responses import response_200
from urlshortener.lambdas.weather_forecast.constants import FORECAST_DAYS, MIN_TEMPERATURE_C, MAX_TEMPERATURE_C, SUMMARIES


logger = logging.getLogger(__name__)


def generate_forecast(days: int = FORECAST_DAYS) -> list[WeatherForecastModel]:
    """Build `days` forecasts starting tomorrow (UTC)."""
    today = datetime.now(UTC).date()
    return [
        WeatherForecastModel(
            date=today + timedelta(days=offset),
            temperature_c=random.randrange(MIN_TEMPERATURE_C, MAX_TEMPERATURE_C),  # noqa: S311
            summary=random.choice(SUMMARIES),  # noqa: S311
        )
        for offset in range(1, days + 1)
    ]


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    forecasts = generate_forecast()
    logger.debug('Generated weather forecast.', extra={'days': len(forecasts)})
    return response_200([forecast.to_dict() for forecast in forecasts])
