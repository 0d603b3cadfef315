"""
This module purpose is to handle command line interface
"""

import argparse
import logging
from pathlib import Path

from .config import DeployConfig
from .errors import DeployError, ProtocolError, ValidationError
from .orchestrator import Deployer
from .packages import PACKAGES, select_package
from .backends.ahv import PRISM_ERRORS_URL
from .utils import error, fatal, success, warning

LOG_FORMAT = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'


def main(argv=None) -> int:
    """
    main: entry point for the program, returns the process exit status
    """
    parser = argparse.ArgumentParser(description="infrakit - deploy splunk infrastructure")
    parser.add_argument("--config", type=Path,
                        help="Config file (default: ~/.config/infrakit/config.yaml, ./infrakit.yaml)")
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # infrakit deploy
    prepare_cmd_deploy(subparsers)

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format=LOG_FORMAT
    )

    if args.command == "deploy":
        return cmd_deploy(args)
    return 1

def prepare_cmd_deploy(subparsers):
    """
    prepare_cmd_deploy: prepares parser for subcommand and args for `deploy`
    """
    deploy_p = subparsers.add_parser("deploy", help="Deploy splunk infrastructure")
    for name, package in PACKAGES.items():
        deploy_p.add_argument(f"--{name}", action="store_true", help=package.describe())
    deploy_p.add_argument(
        "--dry-run", "-n",
        action="store_true",
        help="Show what would be done without applying changes"
    )

def cmd_deploy(args) -> int:
    """
    cmd_deploy: handles 'deploy' command
    """
    try:
        package = select_package(small=args.small, medium=args.medium, large=args.large)
    except ValidationError as e:
        fatal(str(e))
        return 1

    try:
        config = DeployConfig.load(args.config)
    except DeployError as e:
        fatal(f"Failed to load configuration: {e}")
        return 1

    if not args.verbose:
        level = logging.getLevelName(config.log_level)
        if not isinstance(level, int):
            warning(f"Unknown log level '{config.log_level}', using WARNING")
            level = logging.WARNING
        logging.getLogger().setLevel(level)

    try:
        count = Deployer(config).run(package, dry_run=args.dry_run)
    except ProtocolError as e:
        report_protocol_error(e)
        return 1
    except DeployError as e:
        fatal(str(e))
        return 1

    if not args.dry_run:
        success(f"Deployed {count} server(s) with {package.name} package")
    return 0

def report_protocol_error(e: ProtocolError):
    """
    report_protocol_error: prints the HTTP details of a failed Prism call
    """
    fatal(e.message)
    if e.status_code is not None:
        error(f"HTTP Code: {e.status_code} refer to {PRISM_ERRORS_URL} for more information.")
    if e.body:
        error(f"Response: {e.body}")
