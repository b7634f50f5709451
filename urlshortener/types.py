from typing import Any

from botocore.client import BaseClient


# API Gateway proxy integration payloads
type LambdaEvent = dict[str, Any]
type LambdaContext = Any
type LambdaResponse = dict[str, Any]

# load_config() result: {<backend>: {...}, 'shortcode': {...}}
type LambdaConfiguration = dict[str, Any]

type CloudFormationTemplate = dict[str, Any]
type AWSTag = dict[str, str]  # {'Key': 'ResourceGroup', 'Value': 'urlshortener-rg'}

# boto3 clients are generated at runtime; annotate them by service
type AppConfigDataClient = BaseClient
type CloudFormationClient = BaseClient
type ResourceGroupsClient = BaseClient
