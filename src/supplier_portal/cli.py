"""
Command-line interface for Supplier Portal operations.

Runs the API server, prepares the database and manages accounts without
going through HTTP.
"""

import argparse
import getpass
import sys

from supplier_portal.utils.config import get_config
from supplier_portal.utils.exceptions import SupplierPortalError
from supplier_portal.utils.logger import get_logger, setup_logging


cli_logger = get_logger(__name__)


class SupplierPortalCLI:
    """Command-line interface for Supplier Portal operations."""

    def __init__(self):
        self.config = get_config()

    def cmd_serve(self, args) -> int:
        """Start the API server with uvicorn."""
        import uvicorn

        host = args.host or self.config.api_host
        port = args.port or self.config.api_port

        print(f"🚀 Serving Supplier Portal on http://{host}:{port}")
        uvicorn.run(
            "supplier_portal.api.main:app",
            host=host,
            port=port,
            reload=args.reload
        )
        return 0

    def cmd_init_db(self, args) -> int:
        """Create tables and the default administrator."""
        from supplier_portal.database.connection import get_db_context, init_db
        from supplier_portal.services.account_service import ensure_default_admin

        init_db()
        print("✅ Database tables created")

        with get_db_context() as db:
            created = ensure_default_admin(db, self.config.admin_username, self.config.admin_password)

        if created:
            print(f"👤 Default admin '{self.config.admin_username}' created")
        else:
            print(f"👤 Default admin '{self.config.admin_username}' already exists")
        return 0

    def cmd_create_admin(self, args) -> int:
        """Create an additional administrator account."""
        from supplier_portal.database.connection import get_db_context
        from supplier_portal.services.account_service import create_admin

        password = args.password or getpass.getpass("Password: ")

        with get_db_context() as db:
            admin = create_admin(db, args.username, password)
            print(f"✅ Admin '{admin.username}' created (id: {admin.id})")
        return 0

    def cmd_list_tenants(self, args) -> int:
        """Print every tenant with its product count."""
        from supplier_portal.database.connection import get_db_context
        from supplier_portal.services.account_service import list_tenants

        with get_db_context() as db:
            tenants = list_tenants(db)

            if not tenants:
                print("No tenants yet")
                return 0

            print(f"📋 {len(tenants)} tenant(s):")
            for tenant, product_count in tenants:
                state = "active" if tenant.is_active else "disabled"
                print(
                    f"  {tenant.username:<20} {tenant.company_name:<30} "
                    f"{product_count:>3} products  [{state}]"
                )
        return 0


def create_parser() -> argparse.ArgumentParser:
    """Create command-line argument parser."""
    parser = argparse.ArgumentParser(
        prog="supplier-portal",
        description="Supplier Portal CLI - server and account management",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  supplier-portal serve --port 8080         # Run the API
  supplier-portal init-db                   # Create tables and default admin
  supplier-portal create-admin ops          # Add an admin (prompts for password)
  supplier-portal list-tenants              # Show tenant accounts
        """
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    serve_parser = subparsers.add_parser("serve", help="Run the API server")
    serve_parser.add_argument("--host", help="Bind address (default: API_HOST)")
    serve_parser.add_argument("--port", type=int, help="Port (default: API_PORT)")
    serve_parser.add_argument("--reload", action="store_true", help="Reload on code changes")

    subparsers.add_parser("init-db", help="Create database tables and the default admin")

    admin_parser = subparsers.add_parser("create-admin", help="Create an administrator account")
    admin_parser.add_argument("username", help="Administrator username")
    admin_parser.add_argument("--password", help="Password (prompted when omitted)")

    subparsers.add_parser("list-tenants", help="List tenant accounts")

    return parser


def main(argv=None) -> int:
    """Main CLI entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    setup_logging()

    if not args.command:
        parser.print_help()
        return 1

    cli = SupplierPortalCLI()
    handlers = {
        "serve": cli.cmd_serve,
        "init-db": cli.cmd_init_db,
        "create-admin": cli.cmd_create_admin,
        "list-tenants": cli.cmd_list_tenants,
    }

    try:
        return handlers[args.command](args)
    except KeyboardInterrupt:
        print("\n⏹️  Operation cancelled by user")
        return 130
    except SupplierPortalError as e:
        cli_logger.error(f"CLI operation failed: {e}")
        print(f"❌ {e.message}")
        return 1


def cli_entry_point():
    """Entry point for console script."""
    sys.exit(main())


if __name__ == "__main__":
    cli_entry_point()
