"""
Command-line interface for the Uploadcare SDK.

This module provides the ``uploadcare`` command for everyday project
operations: browsing and storing files, managing groups and webhooks, and
uploading files.
"""

import dataclasses
import json
import logging
import os
import sys
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from .client import RestClient, UploadClient
from .config import PUBLIC_KEY_ENV, SECRET_KEY_ENV, ApiCreds, ApiVersion, RestConfig, UploadConfig
from .exceptions import ConfigurationError, UploadcareError
from .models import (
    FileListParams, FileOrdering, FileUploadParams, FromUrlParams,
    GroupListParams, GroupOrdering, ToStore, WebhookCreateParams,
)
from .utils import format_file_size

# Initialize Rich console
console = Console()


class CLIContext:
    """CLI context object to share state between commands."""

    def __init__(self):
        self.config: Dict[str, Any] = {}
        self.config_file = Path.home() / ".uploadcare" / "config.json"

    def load_config(self):
        """Load configuration from file."""
        if self.config_file.exists():
            try:
                with open(self.config_file, 'r') as f:
                    self.config = json.load(f)
            except (json.JSONDecodeError, IOError):
                self.config = {}

    def save_config(self):
        """Save configuration to file."""
        self.config_file.parent.mkdir(parents=True, exist_ok=True)
        with open(self.config_file, 'w') as f:
            json.dump(self.config, f, indent=2)
        self.config_file.chmod(0o600)

    def get_creds(self) -> ApiCreds:
        pub_key = self.config.get('pub_key') or os.getenv(PUBLIC_KEY_ENV)
        secret_key = self.config.get('secret_key') or os.getenv(SECRET_KEY_ENV)

        if not pub_key or not secret_key:
            raise ConfigurationError(
                f"API keys not configured. Use 'uploadcare config' or set {PUBLIC_KEY_ENV} and {SECRET_KEY_ENV}."
            )
        return ApiCreds(secret_key=secret_key, pub_key=pub_key)

    def get_rest_client(self) -> RestClient:
        version = self.config.get('api_version', ApiVersion.V05.value)
        try:
            api_version = ApiVersion(version)
        except ValueError:
            raise ConfigurationError(
                f"Unsupported API version: {version}", config_key='api_version'
            ) from None

        config = RestConfig(
            sign_based_auth=self.config.get('sign_based_auth', True),
            api_version=api_version,
        )
        return RestClient(self.get_creds(), config)

    def get_upload_client(self) -> UploadClient:
        config = UploadConfig(sign_based_upload=self.config.get('sign_based_upload', False))
        return UploadClient(self.get_creds(), config)


# Create CLI context
cli_context = CLIContext()


def _json_default(value):
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, datetime):
        return value.isoformat()
    return str(value)


def print_json(data):
    if dataclasses.is_dataclass(data):
        data = dataclasses.asdict(data)
    elif isinstance(data, list):
        data = [dataclasses.asdict(item) if dataclasses.is_dataclass(item) else item for item in data]
    console.print_json(json.dumps(data, default=_json_default))


def fail(message: str, error: Optional[Exception] = None):
    if error is not None:
        message = f"{message}: {error}"
    console.print(f"❌ {message}")
    sys.exit(1)


def _fmt_date(value: Optional[datetime]) -> str:
    return value.strftime('%Y-%m-%d %H:%M:%S') if value else '-'


@click.group()
@click.option('--debug', is_flag=True, help='Log HTTP traffic')
@click.pass_context
def cli(ctx, debug):
    """Uploadcare CLI - manage files, groups and webhooks of a project."""
    ctx.ensure_object(dict)
    ctx.obj['debug'] = debug

    # Load configuration
    cli_context.load_config()

    if debug:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=console, show_path=False)],
        )
        console.print("[dim]Debug mode enabled[/dim]")


@cli.command()
@click.option('--pub-key', prompt=True, help='Project public key')
@click.option('--secret-key', prompt=True, hide_input=True, help='Project secret key')
@click.option('--api-version', type=click.Choice([v.value for v in ApiVersion]), default=ApiVersion.V05.value,
              help='REST API version')
@click.option('--simple-auth', is_flag=True, help='Send the secret key instead of signing requests')
@click.option('--signed-uploads', is_flag=True, help='Sign Upload API requests')
def config(pub_key, secret_key, api_version, simple_auth, signed_uploads):
    """Configure Uploadcare credentials and settings."""

    cli_context.config.update({
        'pub_key': pub_key,
        'secret_key': secret_key,
        'api_version': api_version,
        'sign_based_auth': not simple_auth,
        'sign_based_upload': signed_uploads,
    })
    cli_context.save_config()

    console.print("✅ Configuration saved successfully!")

    # Test connection
    try:
        with cli_context.get_rest_client() as client:
            info = client.project.info()
        console.print(f"✅ Connection test successful! Project: {info.name}")
    except UploadcareError as e:
        console.print(f"⚠️ Configuration saved but connection test failed: {e}")


@cli.command()
@click.option('--json', 'output_json', is_flag=True, help='Output as JSON')
def project(output_json):
    """Show the project the credentials belong to."""
    try:
        with cli_context.get_rest_client() as client:
            info = client.project.info()
    except UploadcareError as e:
        fail("Failed to get project info", e)

    if output_json:
        print_json(info)
        return

    table = Table(title="Project")
    table.add_column("Property", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Name", info.name)
    table.add_row("Public key", info.pub_key)
    for collaborator in info.collaborators:
        table.add_row("Collaborator", f"{collaborator.name} <{collaborator.email}>")

    console.print(table)


# ---------------------------------------------------------------------------
# files
# ---------------------------------------------------------------------------

@cli.group()
def files():
    """Browse, store and delete files."""


@files.command(name='list')
@click.option('--limit', '-l', default=100, help='Files per page')
@click.option('--stored/--temporary', default=None, help='Only stored or only temporary files')
@click.option('--removed', is_flag=True, help='List removed files')
@click.option('--ordering', type=click.Choice([o.value for o in FileOrdering]),
              default=FileOrdering.DATETIME_UPLOADED.value, help='Sort order')
@click.option('--json', 'output_json', is_flag=True, help='Output as JSON')
def list_files(limit, stored, removed, ordering, output_json):
    """List files of the project."""
    params = FileListParams(removed=removed, stored=stored, limit=limit, ordering=FileOrdering(ordering))

    try:
        with cli_context.get_rest_client() as client:
            page = client.files.list(params)
    except UploadcareError as e:
        fail("Failed to list files", e)

    if output_json:
        print_json(page.results)
        return

    if not page.results:
        console.print("No files found.")
        return

    table = Table(title=f"Files ({page.total if page.total is not None else len(page.results)} total)")
    table.add_column("UUID", style="cyan")
    table.add_column("Name", style="green")
    table.add_column("Size", style="yellow")
    table.add_column("Type", style="blue")
    table.add_column("Uploaded", style="magenta")
    table.add_column("Stored", style="red")

    for file in page.results:
        table.add_row(
            file.uuid,
            file.original_filename or '',
            format_file_size(file.size),
            file.mime_type or '',
            _fmt_date(file.datetime_uploaded),
            "Yes" if file.is_stored else "No",
        )

    console.print(table)


@files.command(name='info')
@click.argument('file_id')
@click.option('--json', 'output_json', is_flag=True, help='Output as JSON')
def file_info(file_id, output_json):
    """Get detailed information about a file."""
    try:
        with cli_context.get_rest_client() as client:
            info = client.files.info(file_id)
    except UploadcareError as e:
        fail("Failed to get file info", e)

    if output_json:
        print_json(info)
        return

    table = Table(title=f"File Information: {info.original_filename or info.uuid}")
    table.add_column("Property", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("UUID", info.uuid)
    table.add_row("Filename", info.original_filename or '')
    table.add_row("Size", format_file_size(info.size))
    table.add_row("MIME Type", info.mime_type or '')
    table.add_row("Uploaded", _fmt_date(info.datetime_uploaded))
    table.add_row("Stored", _fmt_date(info.datetime_stored))
    table.add_row("Removed", _fmt_date(info.datetime_removed))
    table.add_row("URL", info.original_file_url or '')

    if info.image_info:
        table.add_row("Dimensions", f"{info.image_info.width}x{info.image_info.height}")

    console.print(table)


@files.command(name='store')
@click.argument('file_ids', nargs=-1, required=True)
def store_files(file_ids):
    """Store one or more files permanently."""
    try:
        with cli_context.get_rest_client() as client:
            if len(file_ids) == 1:
                client.files.store(file_ids[0])
                console.print(f"✅ Stored: {file_ids[0]}")
                return

            result = client.files.batch_store(file_ids)
    except UploadcareError as e:
        fail("Store failed", e)

    for file in result.result:
        console.print(f"✅ Stored: {file.uuid}")
    for file_id, problem in result.problems.items():
        console.print(f"❌ {file_id}: {problem}")


@files.command(name='delete')
@click.argument('file_ids', nargs=-1, required=True)
@click.confirmation_option(prompt='Are you sure you want to delete these files?')
def delete_files(file_ids):
    """Delete one or more files."""
    try:
        with cli_context.get_rest_client() as client:
            if len(file_ids) == 1:
                info = client.files.delete(file_ids[0])
                console.print(f"✅ Deleted: {info.original_filename or info.uuid}")
                return

            result = client.files.batch_delete(file_ids)
    except UploadcareError as e:
        fail("Delete failed", e)

    for file in result.result:
        console.print(f"✅ Deleted: {file.uuid}")
    for file_id, problem in result.problems.items():
        console.print(f"❌ {file_id}: {problem}")


# ---------------------------------------------------------------------------
# groups
# ---------------------------------------------------------------------------

@cli.group()
def groups():
    """Browse and store file groups."""


@groups.command(name='list')
@click.option('--limit', '-l', default=100, help='Groups per page')
@click.option('--newest-first', is_flag=True, help='Sort by creation date, descending')
@click.option('--json', 'output_json', is_flag=True, help='Output as JSON')
def list_groups(limit, newest_first, output_json):
    """List groups of the project."""
    ordering = GroupOrdering.DATETIME_CREATED_DESC if newest_first else GroupOrdering.DATETIME_CREATED

    try:
        with cli_context.get_rest_client() as client:
            page = client.groups.list(GroupListParams(limit=limit, ordering=ordering))
    except UploadcareError as e:
        fail("Failed to list groups", e)

    if output_json:
        print_json(page.results)
        return

    if not page.results:
        console.print("No groups found.")
        return

    table = Table(title="Groups")
    table.add_column("ID", style="cyan")
    table.add_column("Files", style="yellow")
    table.add_column("Created", style="magenta")
    table.add_column("CDN URL", style="green")

    for group in page.results:
        table.add_row(group.id, str(group.files_count), _fmt_date(group.datetime_created), group.cdn_url or '')

    console.print(table)


@groups.command(name='info')
@click.argument('group_id')
def group_info(group_id):
    """Show a group."""
    try:
        with cli_context.get_rest_client() as client:
            info = client.groups.info(group_id)
    except UploadcareError as e:
        fail("Failed to get group info", e)

    console.print(Panel(
        f"Files: {info.files_count}\n"
        f"Created: {_fmt_date(info.datetime_created)}\n"
        f"Stored: {_fmt_date(info.datetime_stored)}\n"
        f"CDN URL: {info.cdn_url or '-'}",
        title=f"Group {info.id}",
        border_style="green",
    ))


@groups.command(name='store')
@click.argument('group_id')
def store_group(group_id):
    """Store every file of a group."""
    try:
        with cli_context.get_rest_client() as client:
            client.groups.store(group_id)
    except UploadcareError as e:
        fail("Store failed", e)

    console.print(f"✅ Stored group: {group_id}")


# ---------------------------------------------------------------------------
# webhooks
# ---------------------------------------------------------------------------

@cli.group()
def webhooks():
    """Manage webhook subscriptions."""


@webhooks.command(name='list')
@click.option('--json', 'output_json', is_flag=True, help='Output as JSON')
def list_webhooks(output_json):
    """List webhooks of the project."""
    try:
        with cli_context.get_rest_client() as client:
            hooks = client.webhooks.list()
    except UploadcareError as e:
        fail("Failed to list webhooks", e)

    if output_json:
        print_json(hooks)
        return

    if not hooks:
        console.print("No webhooks found.")
        return

    table = Table(title="Webhooks")
    table.add_column("ID", style="cyan")
    table.add_column("Event", style="blue")
    table.add_column("Target URL", style="green")
    table.add_column("Active", style="red")

    for hook in hooks:
        table.add_row(str(hook.id), hook.event, hook.target_url, "Yes" if hook.is_active else "No")

    console.print(table)


@webhooks.command(name='create')
@click.argument('target_url')
@click.option('--signing-secret', help='Secret used to sign webhook payloads')
@click.option('--inactive', is_flag=True, help='Create the webhook disabled')
def create_webhook(target_url, signing_secret, inactive):
    """Subscribe TARGET_URL to file uploads."""
    params = WebhookCreateParams(target_url=target_url, signing_secret=signing_secret, is_active=not inactive)

    try:
        with cli_context.get_rest_client() as client:
            hook = client.webhooks.create(params)
    except UploadcareError as e:
        fail("Failed to create webhook", e)

    console.print(f"✅ Created webhook {hook.id} for {hook.target_url}")


@webhooks.command(name='delete')
@click.argument('target_url')
def delete_webhook(target_url):
    """Unsubscribe the webhook pointing at TARGET_URL."""
    try:
        with cli_context.get_rest_client() as client:
            client.webhooks.delete(target_url)
    except UploadcareError as e:
        fail("Failed to delete webhook", e)

    console.print(f"✅ Deleted webhook for {target_url}")


# ---------------------------------------------------------------------------
# uploads
# ---------------------------------------------------------------------------

@cli.command()
@click.argument('paths', nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False))
@click.option('--store', type=click.Choice([s.value for s in ToStore]), default=ToStore.FALSE.value,
              help='Storing behaviour: 1, 0 or auto')
def upload(paths, store):
    """Upload local files."""
    try:
        with cli_context.get_upload_client() as client:
            for path in paths:
                with console.status(f"Uploading {Path(path).name}"):
                    result = client.uploads.file(FileUploadParams(file=path, store=ToStore(store)))
                for name, uuid in result.items():
                    console.print(f"✅ Uploaded: {name} (UUID: {uuid})")
    except UploadcareError as e:
        fail("Upload failed", e)


@cli.command(name='upload-url')
@click.argument('source_url')
@click.option('--store', type=click.Choice([s.value for s in ToStore]), default=ToStore.FALSE.value,
              help='Storing behaviour: 1, 0 or auto')
@click.option('--filename', help='Name for the uploaded file')
def upload_url(source_url, store, filename):
    """Upload a file from a public URL."""
    params = FromUrlParams(source_url=source_url, store=ToStore(store), filename=filename)

    try:
        with cli_context.get_upload_client() as client:
            result = client.uploads.from_url(params)
    except UploadcareError as e:
        fail("Upload failed", e)

    if result.is_token:
        console.print(f"✅ Upload started, token: {result.token}")
    else:
        console.print(f"✅ Already uploaded: {result.file_info.uuid}")


def main():
    cli(obj={})


if __name__ == '__main__':
    main()
