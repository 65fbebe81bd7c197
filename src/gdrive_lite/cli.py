"""CLI for gdrive-lite.

Usage:
    gdrive-lite status                          # Show configuration status
    gdrive-lite login                           # Authorize and print an access token
    gdrive-lite list                            # List files (first page)
    gdrive-lite download <id-or-url> <dest>     # Download a file's content
    gdrive-lite upload <path>                   # Multipart upload
    gdrive-lite upload <path> --simple          # Metadata + content upload

Commands other than status and login need an access token, passed with
--token or the GDRIVE_ACCESS_TOKEN environment variable.
"""

from __future__ import annotations

import argparse
import logging
import mimetypes
import os
import sys
import webbrowser
from pathlib import Path


def _load_config():
    """Load client configuration from credentials.json or the environment."""
    from gdrive_lite.config import CREDENTIALS_FILE, ENV_CLIENT_ID, ENV_SCOPE
    from gdrive_lite.google import ClientConfig

    if not os.environ.get(ENV_CLIENT_ID) and CREDENTIALS_FILE.exists():
        return ClientConfig.from_credentials_file(
            CREDENTIALS_FILE,
            scope=os.environ.get(ENV_SCOPE) or "drive",
        )
    return ClientConfig.from_env()


def _make_client(token: str | None):
    from gdrive_lite.config import ENV_ACCESS_TOKEN
    from gdrive_lite.drive import DriveClient

    return DriveClient(_load_config(), access_token=token or os.environ.get(ENV_ACCESS_TOKEN))


def cmd_status() -> int:
    """Show configuration status."""
    from gdrive_lite.config import get_config_status

    status = get_config_status()

    print(f"Config dir:       {status['config_dir']}")
    print(f"  .env:             {'[x]' if status['env_file'] else '[ ]'}")
    print(f"  credentials.json: {'[x]' if status['credentials_file'] else '[ ]'}")
    print()
    print("Environment:")
    for name, present in status["env"].items():
        print(f"  {'[x]' if present else '[ ]'} {name}")
    return 0


def cmd_login(no_browser: bool = False) -> int:
    """Interactive OAuth login."""
    from gdrive_lite.google import GoogleAuthError

    try:
        client = _make_client(None)
    except GoogleAuthError as e:
        print(f"Error: {e}")
        print("Set GDRIVE_CLIENT_ID/GDRIVE_CLIENT_SECRET or add credentials.json")
        return 1

    url = client.login_link()
    print(f"Authorization URL:\n{url}\n")

    if not no_browser:
        webbrowser.open(url)

    code = input("Paste authorization code or redirect URL: ").strip()
    if not code:
        print("No code provided; aborting.")
        return 1

    with client:
        try:
            result = client.exchange_token(code)
        except GoogleAuthError as e:
            print(f"\nError: {e}")
            return 1

    if not result.ok:
        print(f"\nToken exchange failed: {result.error}")
        return 1

    print(f"\nAccess token:\n{result.value}")
    print("\nExport it as GDRIVE_ACCESS_TOKEN to use the other commands.")
    return 0


def cmd_list(token: str | None) -> int:
    """List files."""
    with _make_client(token) as client:
        result = client.list_files()

    if not result.ok:
        print(f"Error: {result.error}")
        return 1

    for item in result.value.get("items", []):
        print(f"{item.get('id', ''):<45} {item.get('mimeType', ''):<40} {item.get('title', '')}")
    return 0


def cmd_download(token: str | None, file_ref: str, dest: str) -> int:
    """Download a file's content by id or download URL."""
    from gdrive_lite.drive import DriveError

    with _make_client(token) as client:
        if "://" in file_ref:
            file = {"downloadUrl": file_ref}
        else:
            # Listing is not paginated; only the first page is searched.
            listing = client.list_files()
            if not listing.ok:
                print(f"Error: {listing.error}")
                return 1

            matches = [f for f in listing.value.get("items", []) if f.get("id") == file_ref]
            if not matches:
                print(f"Error: no file with id {file_ref} in the first page of results")
                print("Pass the file's downloadUrl instead")
                return 1
            file = matches[0]

        try:
            result = client.download(file)
        except DriveError as e:
            print(f"Error: {e}")
            return 1

    if not result.ok:
        print(f"Error: {result.error}")
        return 1

    Path(dest).write_bytes(result.value)
    print(f"Saved {len(result.value)} bytes to {dest}")
    return 0


def cmd_upload(
    token: str | None,
    path: str,
    simple: bool = False,
    title: str | None = None,
    mime_type: str | None = None,
) -> int:
    """Upload a local file."""
    source = Path(path).expanduser()
    if not source.exists():
        print(f"Error: File not found: {source}")
        return 1

    if mime_type is None:
        mime_type, _ = mimetypes.guess_type(str(source))
    metadata = {
        "title": title or source.name,
        "mimeType": mime_type or "application/octet-stream",
    }

    with _make_client(token) as client:
        if simple:
            result = client.upload_simple(metadata, source.read_bytes())
        else:
            result = client.upload_multipart(source, metadata)

    if not result.ok:
        print(f"Error: {result.error}")
        if result.orphaned_file_id:
            print(f"An empty file was left on Drive: {result.orphaned_file_id}")
        return 1

    print(f"Uploaded {metadata['title']} ({result.value.get('id')})")
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="gdrive-lite",
        description="Minimal Google Drive client",
    )
    parser.add_argument("--token", type=str, default=None, help="OAuth access token")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log requests")
    subparsers = parser.add_subparsers(dest="command", help="Command")

    subparsers.add_parser("status", help="Show configuration status")

    login_parser = subparsers.add_parser("login", help="Authorize and print an access token")
    login_parser.add_argument(
        "--no-browser",
        action="store_true",
        help="Don't open browser automatically",
    )

    subparsers.add_parser("list", help="List files")

    download_parser = subparsers.add_parser("download", help="Download a file")
    download_parser.add_argument("file_ref", help="Drive file ID or downloadUrl")
    download_parser.add_argument("dest", help="Local destination path")

    upload_parser = subparsers.add_parser("upload", help="Upload a file")
    upload_parser.add_argument("path", help="Local file to upload")
    upload_parser.add_argument(
        "--simple",
        action="store_true",
        help="Send metadata and content in separate requests",
    )
    upload_parser.add_argument("--title", type=str, default=None, help="Title on Drive")
    upload_parser.add_argument("--mime-type", type=str, default=None, help="Content type")

    args = parser.parse_args(argv if argv is not None else sys.argv[1:])

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command is None:
        parser.print_help()
        return 0

    from gdrive_lite.google import GoogleAuthError

    try:
        if args.command == "status":
            return cmd_status()
        if args.command == "login":
            return cmd_login(args.no_browser)
        if args.command == "list":
            return cmd_list(args.token)
        if args.command == "download":
            return cmd_download(args.token, args.file_ref, args.dest)
        if args.command == "upload":
            return cmd_upload(args.token, args.path, args.simple, args.title, args.mime_type)
    except GoogleAuthError as e:
        print(f"Error: {e}")
        print("Run 'gdrive-lite status' to check the configuration")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
