#!/usr/bin/env python3
"""Command-line client for the auth API.

The session is kept in SESSION_FILE (default ./data/session.json) so it
survives between invocations.

Usage:
    uv run python scripts/auth_client.py register new@example.com 'Password123!'
    uv run python scripts/auth_client.py login test@example.com 'Password123!'
    uv run python scripts/auth_client.py status
    uv run python scripts/auth_client.py logout
"""

import argparse
import asyncio
import sys

from authflow.client import AuthApiClient, AuthForm, FileStorage, SessionState, SessionStore
from authflow.config import Settings


def render_dashboard(state: SessionState) -> str:
    if not state.is_logged_in or state.user is None:
        return "Not signed in."
    return "\n".join(
        [
            "Welcome to Dashboard",
            "Welcome back!",
            f"Email: {state.user.email}",
            f"User ID: {state.user.id}",
        ]
    )


async def run(args: argparse.Namespace) -> int:
    settings = Settings()
    api = AuthApiClient.create(settings.api_base_url, timeout=settings.client_timeout_seconds)
    store = SessionStore(api, FileStorage(settings.session_file))
    store.initialize()

    try:
        if args.command == "status":
            print(render_dashboard(store.get_state()))
            return 0

        if args.command == "logout":
            store.logout()
            print("Signed out.")
            return 0

        form = AuthForm(store)
        if args.command == "register":
            form.toggle_mode()
            form.set_confirm_password(args.confirm_password or args.password)
        form.set_email(args.email)
        form.set_password(args.password)

        print("Creating account..." if form.is_sign_up else "Signing in...")
        if not await form.submit():
            for message in (form.errors.email, form.errors.password, form.errors.confirm_password):
                if message:
                    print(f"✗ {message}", file=sys.stderr)
            return 1

        state = store.get_state()
        if form.display_error:
            print(f"✗ {form.display_error}", file=sys.stderr)
            return 1
        print(render_dashboard(state))
        return 0
    finally:
        await api.aclose()


def main() -> None:
    parser = argparse.ArgumentParser(description="Sign in to the auth API from a terminal")
    subparsers = parser.add_subparsers(dest="command", required=True)

    login_parser = subparsers.add_parser("login", help="Sign in to an existing account")
    login_parser.add_argument("email")
    login_parser.add_argument("password")

    register_parser = subparsers.add_parser("register", help="Create an account and sign in")
    register_parser.add_argument("email")
    register_parser.add_argument("password")
    register_parser.add_argument(
        "confirm_password",
        nargs="?",
        help="Repeat the password (defaults to the password)",
    )

    subparsers.add_parser("logout", help="Forget the stored session")
    subparsers.add_parser("status", help="Show the signed-in user")

    args = parser.parse_args()
    sys.exit(asyncio.run(run(args)))


if __name__ == "__main__":
    main()
