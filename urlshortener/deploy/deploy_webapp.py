#!/usr/bin/env python3
"""
Provision, inspect or remove the web app CloudFormation stack.

This CLI drives a small, idempotent deployment workflow:
    - Step 1: Ensure the resource group exists (tag-based AWS Resource Group)
    - Step 2: Build the template for the hosting plan and web app (names derived from a unique suffix)
    - Step 3: Create a Change Set (CREATE or UPDATE) and execute it, streaming stack events
    - Step 4: Print the stack outputs (web app resource identifier)

CLI usage:
    # Create/Update the web app stack
    $ python -m urlshortener.deploy.deploy_webapp up --region eu-central-1 --resource-group urlshortener-rg

    # Print the template without touching AWS
    $ python -m urlshortener.deploy.deploy_webapp synth --region eu-central-1 --suffix abc123

    # Delete the web app stack
    $ python -m urlshortener.deploy.deploy_webapp down --region eu-central-1 --resource-group urlshortener-rg

CLI arguments:
    action (str): up=create/update, down=delete, synth=print template.
    --aws-profile (str): AWS shared config/credentials profile name.
    --region (str): Deployment location (AWS region). Defaults to the profile's region.
    --resource-group (str): Resource group name (default: urlshortener-rg).
    --stack-name (str): CloudFormation stack name (default: <resource group>-webapp).
    --suffix (str): Unique resource name suffix (default: derived from resource group and region).
    --app-env (str): APP_ENV value passed to the web app (default: prod).
    --tags (str): Extra tags, e.g. "Owner=ops,CostCenter=42".
    --output (str): synth only, file to write the template to (default: stdout).
    --dry-run (flag): Preview without applying changes.
    --no-watch (flag): Do not stream stack events.
    --poll (int): Event polling interval in seconds (default: 5).
    --timeout (int): Give up waiting for the stack after this many seconds (default: 3600).
    --yes (flag): Do not ask for confirmation on down.
"""

import argparse
from pathlib import Path
from typing import Optional

from urlshortener.deploy.helper import boto3_session, parse_tags
from urlshortener.deploy.template import build_template, render_template, unique_suffix
from urlshortener.deploy.aws_actions import (
    DEFAULT_TIMEOUT_SECONDS,
    RESOURCE_GROUP_TAG,
    ensure_resource_group,
    deploy_stack_with_changeset,
    delete_stack,
    stack_outputs,
)

DEFAULT_RESOURCE_GROUP = 'urlshortener-rg'


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='deploy_webapp.py',
        description='Create/Update, Delete or print the web app CloudFormation stack.',
    )
    parser.add_argument('action', choices=('up', 'down', 'synth'), help='up=create/update, down=delete, synth=print template')
    parser.add_argument('--aws-profile', default=None, help='AWS shared config/credentials profile name')
    parser.add_argument('--region', default=None, help='Deployment location (AWS region)')
    parser.add_argument('--resource-group', default=DEFAULT_RESOURCE_GROUP, help='Resource group name')
    parser.add_argument('--stack-name', default=None, help='CloudFormation stack name (default: <resource group>-webapp)')
    parser.add_argument('--suffix', default=None, help='Unique resource name suffix (default: derived from resource group and region)')
    parser.add_argument('--app-env', default='prod', help='APP_ENV value passed to the web app')
    parser.add_argument('--tags', type=parse_tags, default=[], help='Extra tags, e.g. "Owner=ops,CostCenter=42"')
    parser.add_argument('--output', default=None, help='synth only: write the template to this file')
    parser.add_argument('--dry-run', action='store_true', help='Preview without applying changes')
    parser.add_argument('--no-watch', action='store_true', help='Do not stream stack events')
    parser.add_argument('--poll', type=int, default=5, help='Event polling interval in seconds (default: 5)')
    parser.add_argument(
        '--timeout',
        type=int,
        default=DEFAULT_TIMEOUT_SECONDS,
        help=f'Give up waiting for the stack after this many seconds (default: {DEFAULT_TIMEOUT_SECONDS})',
    )
    parser.add_argument('--yes', action='store_true', help='Do not ask for confirmation on down')
    return parser


def main(argv: Optional[list[str]] = None) -> None:
    """CLI entry point."""
    args = build_parser().parse_args(argv)
    stack_name = args.stack_name or f'{args.resource_group}-webapp'

    if args.action == 'synth':
        if not args.region:
            raise ValueError("--region is required for action 'synth'.")
        suffix = args.suffix or unique_suffix(args.resource_group, args.region)
        body = render_template(build_template(args.region, suffix, app_env=args.app_env))
        if args.output:
            Path(args.output).write_text(body, encoding='utf-8')
            print(f"Template written to '{args.output}'")
        else:
            print(body)
        return

    session = boto3_session(args.aws_profile, args.region)
    location = args.region or session.region_name
    if not location:
        raise ValueError('No region configured: pass --region or set one on the AWS profile.')
    cfn = session.client('cloudformation')

    if args.action == 'up':
        suffix = args.suffix or unique_suffix(args.resource_group, location)
        ensure_resource_group(session.client('resource-groups'), args.resource_group, tags=args.tags, dry_run=args.dry_run)

        template_body = render_template(build_template(location, suffix, app_env=args.app_env))
        deploy_stack_with_changeset(
            cfn_client=cfn,
            stack_name=stack_name,
            template_body=template_body,
            tags=[{'Key': RESOURCE_GROUP_TAG, 'Value': args.resource_group}, *args.tags],
            dry_run=args.dry_run,
            watch=not args.no_watch,
            poll_seconds=args.poll,
            timeout_seconds=args.timeout,
        )
        if not args.dry_run:
            for key, value in stack_outputs(cfn, stack_name).items():
                print(f'{key}: {value}')
    else:
        if not args.yes:
            confirm = input(f"Are you sure you want to delete the stack '{stack_name}'? [y/N]: ").strip().lower()
            if confirm not in ('y', 'yes'):
                print('Deletion cancelled.')
                return
        delete_stack(
            cfn_client=cfn,
            stack_name=stack_name,
            dry_run=args.dry_run,
            watch=not args.no_watch,
            poll_seconds=args.poll,
            timeout_seconds=args.timeout,
        )


if __name__ == '__main__':
    main()
