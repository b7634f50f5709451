from dataclasses import dataclass
from datetime import date, datetime


# fmt: off
@dataclass(frozen=True)
class ShortLinkModel:
    target: str                         # Original long URL
    shortcode: str                      # Unique short identifier of shortened URL
    created_at: datetime | None = None  # Creation time (UTC), set by the data store when missing
    expires_at: datetime | None = None  # TTL as Python datetime, after which this record is expired
# fmt: on


@dataclass(frozen=True)
class WeatherForecastModel:
    """Represent a single day of the demo weather forecast.

    Attributes:
        date (date):
            Calendar day the forecast applies to.
        temperature_c (int):
            Temperature in degrees Celsius.
        summary (str):
            Human readable description, e.g. 'Chilly'.

    Example:
        >>> forecast = WeatherForecastModel(date=date(2025, 10, 16), temperature_c=20, summary='Mild')
        >>> forecast.temperature_f
        67
        >>> forecast.to_dict()
        {'date': '2025-10-16', 'temperatureC': 20, 'temperatureF': 67, 'summary': 'Mild'}
    """

    date: date
    temperature_c: int
    summary: str

    @property
    def temperature_f(self) -> int:
        return 32 + int(self.temperature_c / 0.5556)

    def to_dict(self) -> dict:
        return {
            'date': self.date.isoformat(),
            'temperatureC': self.temperature_c,
            'temperatureF': self.temperature_f,
            'summary': self.summary,
        }
