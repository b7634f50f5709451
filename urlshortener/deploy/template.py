"""CloudFormation template for the hosted web app.

The template provisions two resources whose names are deterministic functions
of a unique suffix:

    HostingPlan (AWS::ElasticBeanstalk::Application)  ->  urlshortener-plan-<suffix>
    WebApp      (AWS::ElasticBeanstalk::Environment)  ->  urlshortener-web-<suffix>

and outputs the web app's resource identifier as `WebAppId`.

Functions:
    unique_suffix(*seeds: str) -> str
    hosting_plan_name(suffix: str) -> str
    web_app_name(suffix: str) -> str
    build_template(location: str, suffix: str, ...) -> dict
    render_template(template: dict) -> str

Example:
    >>> suffix = unique_suffix('urlshortener-rg', 'eu-central-1')
    >>> template = build_template('eu-central-1', suffix)
    >>> template['Resources']['WebApp']['Properties']['EnvironmentName'] == web_app_name(suffix)
    True
"""

import re

import xxhash
import yaml

from urlshortener.types import CloudFormationTemplate


APP_NAME = 'urlshortener'
SUFFIX_LENGTH = 13

# Elastic Beanstalk environment names are limited to 40 characters
_SUFFIX_PATTERN = re.compile(r'^[a-z0-9]{1,23}$')
_LOCATION_PATTERN = re.compile(r'^[a-z]{2}(-gov)?-[a-z]+-\d$')

DEFAULT_SOLUTION_STACK = '64bit Amazon Linux 2023 v4.3.0 running Python 3.12'
DEFAULT_INSTANCE_TYPE = 't3.micro'
DEFAULT_INSTANCE_PROFILE = 'aws-elasticbeanstalk-ec2-role'


def unique_suffix(*seeds: str) -> str:
    """Derive a deterministic lowercase suffix from one or more seed strings.

    The same seeds always yield the same suffix, so redeploying into the same
    resource group and location targets the same resources.
    """
    if not seeds or not all(isinstance(seed, str) and seed for seed in seeds):
        raise ValueError('At least one non-empty seed string is required.')
    return xxhash.xxh64_hexdigest('/'.join(seeds))[:SUFFIX_LENGTH]


def _validate_suffix(suffix: str) -> str:
    if not isinstance(suffix, str) or not _SUFFIX_PATTERN.match(suffix):
        raise ValueError(f'Suffix must be 1-23 lowercase alphanumeric characters (given value: {suffix!r}).')
    return suffix


def hosting_plan_name(suffix: str) -> str:
    return f'{APP_NAME}-plan-{_validate_suffix(suffix)}'


def web_app_name(suffix: str) -> str:
    return f'{APP_NAME}-web-{_validate_suffix(suffix)}'


def build_template(
    location: str,
    suffix: str,
    *,
    app_env: str = 'prod',
    instance_type: str = DEFAULT_INSTANCE_TYPE,
    instance_profile: str = DEFAULT_INSTANCE_PROFILE,
    solution_stack: str = DEFAULT_SOLUTION_STACK,
) -> CloudFormationTemplate:
    """Build the CloudFormation template for a Linux-hosted web app and its hosting plan.

    Args:
        location (str):
            AWS region the stack is deployed to, e.g. 'eu-central-1'.
        suffix (str):
            Unique suffix appended to every resource name.

    Returns:
        dict: CloudFormation template. Identical inputs produce identical templates.

    Raises:
        ValueError: If location is not an AWS region name or suffix is malformed.
    """
    if not isinstance(location, str) or not _LOCATION_PATTERN.match(location):
        raise ValueError(f'Location must be an AWS region name, e.g. eu-central-1 (given value: {location!r}).')

    plan_name = hosting_plan_name(suffix)
    app_name = web_app_name(suffix)

    def env_option(name: str, value: str) -> dict[str, str]:
        return {'Namespace': 'aws:elasticbeanstalk:application:environment', 'OptionName': name, 'Value': value}

    # fmt: off
    return {
        'AWSTemplateFormatVersion': '2010-09-09',
        'Description': f'{APP_NAME} web app and hosting plan ({location}, suffix {suffix})',
        'Metadata': {
            'Location': location,
            'Suffix': suffix,
        },
        'Resources': {
            'HostingPlan': {
                'Type': 'AWS::ElasticBeanstalk::Application',
                'Properties': {
                    'ApplicationName': plan_name,
                    'Description': f'Hosting plan for {app_name}',
                },
            },
            'WebApp': {
                'Type': 'AWS::ElasticBeanstalk::Environment',
                'Properties': {
                    'ApplicationName': {'Ref': 'HostingPlan'},
                    'EnvironmentName': app_name,
                    'SolutionStackName': solution_stack,
                    'Tier': {'Name': 'WebServer', 'Type': 'Standard'},
                    'OptionSettings': [
                        {'Namespace': 'aws:autoscaling:launchconfiguration', 'OptionName': 'InstanceType', 'Value': instance_type},
                        {'Namespace': 'aws:autoscaling:launchconfiguration', 'OptionName': 'IamInstanceProfile', 'Value': instance_profile},
                        env_option('APP_NAME', APP_NAME),
                        env_option('APP_ENV', app_env),
                    ],
                },
            },
        },
        'Outputs': {
            'WebAppId': {
                'Description': 'Resource identifier of the web app',
                'Value': {'Ref': 'WebApp'},
            },
            'WebAppUrl': {
                'Description': 'Public endpoint of the web app',
                'Value': {'Fn::GetAtt': ['WebApp', 'EndpointURL']},
            },
        },
    }
    # fmt: on


def render_template(template: CloudFormationTemplate) -> str:
    """Serialize a template to YAML (CloudFormation TemplateBody)."""
    return yaml.safe_dump(template, sort_keys=False)
