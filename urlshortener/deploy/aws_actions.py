"""AWS action primitives for deploying the web app.

Exposed functions:
    ensure_resource_group(rg_client, name, *, tags=None, dry_run=False) -> bool
    stack_status(cfn_client, stack_name) -> str | None
    deploy_stack_with_changeset(cfn_client, stack_name, template_body, ...) -> str | None
    delete_stack(cfn_client, stack_name, ...) -> None
    stack_outputs(cfn_client, stack_name) -> dict[str, str]

Behavior:
    - `ensure_resource_group`:
        * Creates a tag-based AWS Resource Group if it doesn't exist (idempotent).
        * Resources belong to the group through the `ResourceGroup=<name>` tag.

    - `deploy_stack_with_changeset`:
        * Creates a CREATE or UPDATE change set depending on the stack's state.
        * A stack left in ROLLBACK_COMPLETE by a failed first create is deleted and created again.
        * Empty change sets are reported and removed, not treated as failures.
        * Executes the change set (unless dry-run) and waits for a terminal status,
          optionally streaming stack events. Waiting gives up after `timeout_seconds`.

Raises:
    DeploymentError: When a change set or stack operation ends in a failed state.
    botocore.exceptions.BotoCoreError / ClientError for AWS API failures.
"""

import json
import time
from datetime import datetime, UTC

from botocore.exceptions import ClientError, WaiterError

from urlshortener.exceptions import DeploymentError
from urlshortener.types import AWSTag, CloudFormationClient, ResourceGroupsClient


RESOURCE_GROUP_TAG = 'ResourceGroup'
SUCCESS_STATUSES = frozenset({'CREATE_COMPLETE', 'UPDATE_COMPLETE', 'IMPORT_COMPLETE'})
# A stack whose first creation failed; it can only be deleted
DEAD_STATUSES = frozenset({'ROLLBACK_COMPLETE', 'ROLLBACK_FAILED'})
DEFAULT_TIMEOUT_SECONDS = 3600
NO_CHANGES_REASONS = ("didn't contain changes", 'No updates are to be performed')


def ensure_resource_group(
    rg_client: ResourceGroupsClient,
    name: str,
    *,
    tags: list[AWSTag] | None = None,
    dry_run: bool = False,
) -> bool:
    """Create the resource group `name` unless it already exists.

    Returns:
        bool: True if the group was created, False if it existed (or dry-run).
    """
    msg = f"Resource group name='{name}'"
    if dry_run:
        print('[DRY-RUN]', msg)
        return False

    try:
        rg_client.get_group(Group=name)
    except rg_client.exceptions.NotFoundException:
        pass
    else:
        print(msg + ' [exists]')
        return False

    query = {
        'ResourceTypeFilters': ['AWS::AllSupported'],
        'TagFilters': [{'Key': RESOURCE_GROUP_TAG, 'Values': [name]}],
    }
    kwargs = {'Name': name, 'ResourceQuery': {'Type': 'TAG_FILTERS_1_0', 'Query': json.dumps(query)}}
    if tags:
        # Resource Groups takes tags as a plain mapping
        kwargs['Tags'] = {tag['Key']: tag['Value'] for tag in tags}
    rg_client.create_group(**kwargs)
    print(msg + ' [created]')
    return True


def stack_status(cfn_client: CloudFormationClient, stack_name: str) -> str | None:
    """Return the stack's status, or None if the stack doesn't exist."""
    try:
        stacks = cfn_client.describe_stacks(StackName=stack_name)['Stacks']
    except ClientError as e:
        if 'does not exist' in str(e):
            return None
        raise
    return stacks[0]['StackStatus'] if stacks else None


def stack_outputs(cfn_client: CloudFormationClient, stack_name: str) -> dict[str, str]:
    """Return the stack outputs as an OutputKey -> OutputValue mapping."""
    stacks = cfn_client.describe_stacks(StackName=stack_name)['Stacks']
    return {output['OutputKey']: output['OutputValue'] for output in stacks[0].get('Outputs', [])}


def _print_new_events(cfn_client: CloudFormationClient, stack_name: str, seen: set[str], since: datetime | None) -> None:
    try:
        events = cfn_client.describe_stack_events(StackName=stack_name)['StackEvents']
    except ClientError:
        return  # stack is gone (deletion finished)

    # describe_stack_events returns newest first
    for event in reversed(events):
        if event['EventId'] in seen:
            continue
        seen.add(event['EventId'])
        if since is not None and event['Timestamp'] < since:
            continue
        reason = event.get('ResourceStatusReason', '')
        print(f"  {event['Timestamp']:%H:%M:%S} {event['LogicalResourceId']:<20} {event['ResourceStatus']} {reason}".rstrip())


def wait_for_stack(
    cfn_client: CloudFormationClient,
    stack_name: str,
    *,
    watch: bool = True,
    poll_seconds: int = 5,
    since: datetime | None = None,
    timeout_seconds: int = DEFAULT_TIMEOUT_SECONDS,
) -> str | None:
    """Poll until the stack leaves every *_IN_PROGRESS state and return its final status.

    Raises:
        DeploymentError: If the stack is still in progress after `timeout_seconds`.
    """
    deadline = time.monotonic() + timeout_seconds
    seen: set[str] = set()
    while True:
        if watch:
            _print_new_events(cfn_client, stack_name, seen, since)
        status = stack_status(cfn_client, stack_name)
        if status is None or not status.endswith('_IN_PROGRESS'):
            return status
        if time.monotonic() >= deadline:
            raise DeploymentError(f"Stack '{stack_name}' still {status} after {timeout_seconds}s")
        time.sleep(poll_seconds)


def deploy_stack_with_changeset(
    cfn_client: CloudFormationClient,
    stack_name: str,
    template_body: str,
    *,
    parameters: dict[str, str] | None = None,
    capabilities: list[str] | None = None,
    tags: list[AWSTag] | None = None,
    dry_run: bool = False,
    watch: bool = True,
    poll_seconds: int = 5,
    timeout_seconds: int = DEFAULT_TIMEOUT_SECONDS,
) -> str | None:
    """Create (or update) a stack through a change set.

    Steps:
        - Delete the stack first if its initial creation failed (ROLLBACK_COMPLETE),
          since such a stack can't be updated.
        - Pick CREATE or UPDATE depending on whether the stack exists.
        - Create the change set and wait for it to be ready.
        - Print the planned resource changes.
        - Execute the change set (skipped on dry-run) and wait for the stack.

    Returns:
        str | None: final stack status (previous status if nothing was executed).

    Raises:
        DeploymentError: If the change set fails or the stack ends in a failed/rolled back state.
    """
    status = stack_status(cfn_client, stack_name)
    if status in DEAD_STATUSES:
        if dry_run:
            print('[DRY-RUN]', f"stack '{stack_name}' is in {status}, it would be deleted and created again")
            return status
        print(f"Stack '{stack_name}' is in {status} and can't be updated, deleting it first")
        delete_stack(cfn_client, stack_name, watch=watch, poll_seconds=poll_seconds, timeout_seconds=timeout_seconds)
        status = None

    change_set_type = 'CREATE' if status in (None, 'REVIEW_IN_PROGRESS') else 'UPDATE'
    change_set_name = f'{stack_name}-{int(time.time())}'
    change_set_id = {'StackName': stack_name, 'ChangeSetName': change_set_name}

    kwargs = {**change_set_id, 'ChangeSetType': change_set_type, 'TemplateBody': template_body}
    if parameters:
        kwargs['Parameters'] = [{'ParameterKey': k, 'ParameterValue': v} for k, v in parameters.items()]
    if capabilities:
        kwargs['Capabilities'] = capabilities
    if tags:
        kwargs['Tags'] = tags
    cfn_client.create_change_set(**kwargs)
    print(f"Change set '{change_set_name}' ({change_set_type}) requested for stack '{stack_name}'")

    try:
        cfn_client.get_waiter('change_set_create_complete').wait(**change_set_id)
    except WaiterError as e:
        reason = cfn_client.describe_change_set(**change_set_id).get('StatusReason', '')
        if any(marker in reason for marker in NO_CHANGES_REASONS):
            print(f"Stack '{stack_name}' is up to date, nothing to deploy")
            cfn_client.delete_change_set(**change_set_id)
            return status
        raise DeploymentError(f"Change set '{change_set_name}' failed: {reason}") from e

    for change in cfn_client.describe_change_set(**change_set_id).get('Changes', []):
        resource = change.get('ResourceChange', {})
        print(f"  {resource.get('Action')} {resource.get('LogicalResourceId')} ({resource.get('ResourceType')})")

    if dry_run:
        print('[DRY-RUN]', f"change set '{change_set_name}' not executed")
        cfn_client.delete_change_set(**change_set_id)
        return status

    since = datetime.now(UTC)
    cfn_client.execute_change_set(**change_set_id)
    final_status = wait_for_stack(
        cfn_client, stack_name, watch=watch, poll_seconds=poll_seconds, since=since, timeout_seconds=timeout_seconds
    )
    if final_status not in SUCCESS_STATUSES:
        raise DeploymentError(f"Stack '{stack_name}' finished in status {final_status}")

    print(f"Stack '{stack_name}' {final_status}")
    return final_status


def delete_stack(
    cfn_client: CloudFormationClient,
    stack_name: str,
    *,
    dry_run: bool = False,
    watch: bool = True,
    poll_seconds: int = 5,
    timeout_seconds: int = DEFAULT_TIMEOUT_SECONDS,
) -> None:
    """Delete a stack and wait for the deletion to finish."""
    msg = f"Delete stack name='{stack_name}'"
    if dry_run:
        print('[DRY-RUN]', msg)
        return

    if stack_status(cfn_client, stack_name) is None:
        print(msg + ' [absent]')
        return

    since = datetime.now(UTC)
    cfn_client.delete_stack(StackName=stack_name)
    final_status = wait_for_stack(
        cfn_client, stack_name, watch=watch, poll_seconds=poll_seconds, since=since, timeout_seconds=timeout_seconds
    )
    if final_status not in (None, 'DELETE_COMPLETE'):
        raise DeploymentError(f"Stack '{stack_name}' deletion finished in status {final_status}")
    print(msg + ' [deleted]')
