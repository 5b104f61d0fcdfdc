"""
CLI entry point — argument parsing and launching the review app.
"""

import argparse
import sys

from .authority.http_client import HttpAuthority
from .cli_display import log, setup_logger
from .config import Config
from .controller import ReviewController
from .review_app import ReviewApp


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Diff Review — review and apply proposed code changes")
    parser.add_argument("session_id", help="The review session to open")
    parser.add_argument("--url", default=None,
                        help="Review server base URL (default: from config)")
    parser.add_argument("--config", default=None,
                        help="Path to .diff_review.yaml config file")
    parser.add_argument("--close-delay", type=float, default=None,
                        help="Seconds to keep the UI open after completion")
    args = parser.parse_args(argv)

    cfg = Config.load(args.config)
    setup_logger(cfg.LOG_DIR)

    base_url = args.url or cfg.AUTHORITY_URL
    close_delay = args.close_delay if args.close_delay is not None else cfg.CLOSE_DELAY
    log.info(f"Opening session {args.session_id} at {base_url}")

    authority = HttpAuthority(base_url, connect_timeout=cfg.CONNECT_TIMEOUT,
                              read_timeout=cfg.READ_TIMEOUT)
    controller = ReviewController(authority, args.session_id)
    app = ReviewApp(controller, close_delay=close_delay)
    try:
        app.run()
    finally:
        authority.close()

    if controller.load_error is not None:
        print(f"\n  [ERROR] Failed to load diff session: {controller.load_error}\n")
        return 1
    if app.applied_changes is not None:
        print(f"\n  Session {controller.session.status}: "
              f"{len(app.applied_changes)} change(s) applied.\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
