import json
from datetime import datetime, timedelta, UTC
from typing import cast
from unittest.mock import MagicMock

import pytest
from pytest import MonkeyPatch

from urlshortener.types import LambdaEvent, LambdaContext, LambdaConfiguration
from urlshortener.lambdas.redirect_url import app
from urlshortener.models import ShortLinkModel
from urlshortener.dao.base import ShortLinkBaseDAO
from urlshortener.dao.exceptions import DataStoreError, ShortLinkNotFoundError
from urlshortener.exceptions import MissingEnvironmentVariableError
from urlshortener.utils import helpers


def _event(path_parameters: dict | None) -> LambdaEvent:
    return cast(
        LambdaEvent,
        {
            'resource': '/{shortcode}',
            'httpMethod': 'GET',
            'path': '/abc123',
            'pathParameters': path_parameters,
            'requestContext': {'domainName': 'testhost.execute-api.eu-central-1.amazonaws.com', 'stage': 'test'},
        },
    )


class TestRedirectUrlHandler:
    @pytest.fixture
    def context(self) -> LambdaContext:
        return cast(LambdaContext, {'function_name': 'redirect_url'})

    @pytest.fixture
    def config(self) -> LambdaConfiguration:
        return cast(LambdaConfiguration, {'redis': {'host': 'redis.test', 'port': 6379, 'db': 0}})

    @pytest.fixture
    def short_link_dao(self) -> ShortLinkBaseDAO:
        dao = MagicMock(spec=ShortLinkBaseDAO)
        dao.get.return_value = ShortLinkModel(
            target='https://example.com/blog/chuck-norris-is-awesome',
            shortcode='abc123',
            created_at=datetime.now(UTC),
            expires_at=datetime.now(UTC) + timedelta(days=10),
        )
        return dao

    @pytest.fixture(autouse=True)
    def setup(self, monkeypatch: MonkeyPatch, config: LambdaConfiguration, short_link_dao: ShortLinkBaseDAO):
        monkeypatch.delenv('APP_NAME', raising=False)
        monkeypatch.setattr(helpers, 'running_locally', lambda: False)
        monkeypatch.setattr(app, 'load_config', MagicMock(return_value=config))
        self.dao_class = MagicMock(return_value=short_link_dao)
        monkeypatch.setattr(app, 'ShortLinkRedisDAO', self.dao_class)
        self.dao = short_link_dao

    def test_redirect_url_302(self, context):
        response = app.lambda_handler(_event({'shortcode': 'abc123'}), context)

        assert response['statusCode'] == 302
        assert response['headers'] == {'Location': 'https://example.com/blog/chuck-norris-is-awesome'}
        self.dao_class.assert_called_once_with(redis_host='redis.test', redis_port=6379, redis_db=0, prefix=None)
        self.dao.get.assert_called_once_with(shortcode='abc123')

    def test_redirect_url_is_repeatable(self, context):
        first = app.lambda_handler(_event({'shortcode': 'abc123'}), context)
        second = app.lambda_handler(_event({'shortcode': 'abc123'}), context)
        assert first == second

    @pytest.mark.parametrize('path_parameters', [None, {}, {'invalid': 'path'}])
    def test_redirect_url_400_missing_shortcode(self, context, path_parameters):
        response = app.lambda_handler(_event(path_parameters), context)

        assert response['statusCode'] == 400
        assert json.loads(response['body']) == {'message': "Bad Request (missing 'shortcode' in path)", 'error_code': 'MISSING_SHORTCODE'}
        self.dao.get.assert_not_called()

    def test_redirect_url_404_unknown_shortcode(self, context):
        self.dao.get.side_effect = ShortLinkNotFoundError("Short link with code 'nope123' not found.")

        response = app.lambda_handler(_event({'shortcode': 'nope123'}), context)

        assert response['statusCode'] == 404
        assert json.loads(response['body']) == {
            'message': "Not Found (short url https://testhost.execute-api.eu-central-1.amazonaws.com/test/nope123 doesn't exist)",
            'error_code': 'SHORT_LINK_NOT_FOUND',
        }

    @pytest.mark.parametrize('shortcode', ['', 'abc-123', 'x' * 64])
    def test_redirect_url_404_malformed_shortcode(self, context, shortcode):
        response = app.lambda_handler(_event({'shortcode': shortcode}), context)

        assert response['statusCode'] == 404
        assert json.loads(response['body'])['error_code'] == 'SHORT_LINK_NOT_FOUND'
        self.dao_class.assert_not_called()

    def test_redirect_url_500_on_configuration_error(self, monkeypatch, context):
        monkeypatch.setattr(app, 'load_config', MagicMock(side_effect=MissingEnvironmentVariableError("'APPCONFIG_APP_ID'")))

        response = app.lambda_handler(_event({'shortcode': 'abc123'}), context)

        assert response['statusCode'] == 500
        assert json.loads(response['body']) == {'message': 'Internal Server Error', 'error_code': 'CONFIGURATION_ERROR'}

    def test_redirect_url_500_on_datastore_error(self, context):
        self.dao.get.side_effect = DataStoreError("Can't connect to Redis at redis.test:6379/0.")

        response = app.lambda_handler(_event({'shortcode': 'abc123'}), context)

        assert response['statusCode'] == 500
        assert json.loads(response['body'])['error_code'] == 'UNKNOWN_INTERNAL_SERVER_ERROR'
