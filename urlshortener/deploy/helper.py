import argparse

import boto3

from urlshortener.types import AWSTag


def parse_tags(value: str) -> list[AWSTag]:
    """argparse type for --tags: "Owner=ops,CostCenter=42" -> AWS tag dicts.

    Empty segments are ignored. Keys must be unique, non-empty and outside
    the reserved 'aws:' namespace.

    Example:
        >>> parse_tags('Owner=ops, Service=urlshortener,')
        [{'Key': 'Owner', 'Value': 'ops'}, {'Key': 'Service', 'Value': 'urlshortener'}]
    """
    pairs = [segment.partition('=') for segment in map(str.strip, value.split(',')) if segment]

    malformed = [key + sep + val for key, sep, val in pairs if not sep or not key.strip()]
    if malformed:
        raise argparse.ArgumentTypeError(f'Malformed tag(s), expected key=value: {", ".join(malformed)}')

    tags = [{'Key': key.strip(), 'Value': val.strip()} for key, _, val in pairs]
    keys = [tag['Key'] for tag in tags]
    if len(set(keys)) != len(keys):
        raise argparse.ArgumentTypeError(f'Duplicate tag keys: {", ".join(sorted({k for k in keys if keys.count(k) > 1}))}')
    if any(key.lower().startswith('aws:') for key in keys):
        raise argparse.ArgumentTypeError("Tag keys starting with 'aws:' are reserved")
    return tags


def boto3_session(profile: str | None, region: str | None = None) -> boto3.Session:
    """Build a boto3 Session honoring an optional profile and region."""
    options = {'profile_name': profile, 'region_name': region}
    return boto3.Session(**{name: value for name, value in options.items() if value})
