import json
from datetime import date

import pytest
from freezegun import freeze_time

from urlshortener.lambdas.weather_forecast import app
from urlshortener.lambdas.weather_forecast.constants import FORECAST_DAYS, MIN_TEMPERATURE_C, MAX_TEMPERATURE_C, SUMMARIES


@freeze_time('2025-10-15 23:30:00')
def test_generate_forecast_dates():
    forecasts = app.generate_forecast()
    assert [forecast.date for forecast in forecasts] == [date(2025, 10, day) for day in range(16, 21)]


@pytest.mark.parametrize('days', [0, 1, 7])
def test_generate_forecast_days(days):
    assert len(app.generate_forecast(days)) == days


def test_generate_forecast_values_in_range():
    for forecast in app.generate_forecast(200):
        assert MIN_TEMPERATURE_C <= forecast.temperature_c < MAX_TEMPERATURE_C
        assert forecast.summary in SUMMARIES


def test_lambda_handler_200(monkeypatch):
    monkeypatch.setattr(app.random, 'randrange', lambda start, stop: 20)
    monkeypatch.setattr(app.random, 'choice', lambda seq: seq[0])

    with freeze_time('2025-10-15'):
        response = app.lambda_handler({'httpMethod': 'GET', 'path': '/weatherforecast'}, None)

    assert response['statusCode'] == 200
    assert response['headers'] == {'Content-Type': 'application/json'}
    body = json.loads(response['body'])
    assert len(body) == FORECAST_DAYS
    assert body[0] == {'date': '2025-10-16', 'temperatureC': 20, 'temperatureF': 67, 'summary': SUMMARIES[0]}
