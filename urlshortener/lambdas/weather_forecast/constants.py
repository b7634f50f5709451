FORECAST_DAYS = 5

# Temperature range in Celsius: [MIN_TEMPERATURE_C, MAX_TEMPERATURE_C)
MIN_TEMPERATURE_C = -20
MAX_TEMPERATURE_C = 55

SUMMARIES = (
    'Freezing',
    'Bracing',
    'Chilly',
    'Cool',
    'Mild',
    'Warm',
    'Balmy',
    'Hot',
    'Sweltering',
    'Scorching',
)
