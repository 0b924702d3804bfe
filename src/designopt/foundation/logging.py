from __future__ import annotations

import logging


def configure_designopt_logging(*, level: int = logging.INFO) -> None:
    """
    Configure a minimal console logger for designopt.

    Notes:
        - This is opt-in (library code must not call logging.basicConfig()).
        - The handler is only attached if neither the root logger nor the "designopt" logger has handlers.
    """
    root = logging.getLogger()
    package_logger = logging.getLogger("designopt")

    # If the user already configured logging, don't interfere.
    if root.handlers or package_logger.handlers:
        return

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(message)s"))
    package_logger.addHandler(handler)
    package_logger.setLevel(level)
    package_logger.propagate = False


__all__ = ["configure_designopt_logging"]
