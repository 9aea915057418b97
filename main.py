#!/usr/bin/env python3

"""
Entry point script that launches the terminal dashboard.
"""

import argparse
import asyncio
import logging
import sys

logger = logging.getLogger("gfly_dashboard.main")


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description='GFly Dashboard'
    )
    parser.add_argument(
        '--url',
        help='Device address, e.g. http://192.168.4.1:8080'
    )
    parser.add_argument(
        '--interval',
        type=int,
        help='Poll interval in milliseconds'
    )
    parser.add_argument(
        '--timeout',
        type=float,
        help='Status request timeout in seconds (default: no timeout)'
    )
    parser.add_argument(
        '--page',
        choices=['current', 'maxmin', 'track', 'info'],
        help='Page to show first'
    )
    parser.add_argument(
        '--debug',
        action='store_true',
        help='Enable debug logging'
    )
    return parser.parse_args(argv)


async def main(argv=None):
    """Main entry point."""
    args = parse_args(argv)

    from gfly_dashboard.config.settings import settings
    from gfly_dashboard.ui.cli import create_cli

    logging.getLogger("gfly_dashboard").setLevel(
        logging.DEBUG if args.debug else settings.get('log_level', 'INFO')
    )

    # Command line values apply to this run only
    settings.update({
        'base_url': args.url,
        'poll_interval_ms': args.interval,
        'fetch_timeout': args.timeout,
        'default_page': args.page,
    })

    try:
        cli = create_cli()
        await cli.run()
    except ValueError as e:
        logger.error(f"Invalid configuration: {e}")
        sys.exit(1)


def run():
    """Console script entry point."""
    asyncio.run(main())


if __name__ == '__main__':
    run()
