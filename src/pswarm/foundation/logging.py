from __future__ import annotations

import logging


def configure_pswarm_logging(*, level: int = logging.INFO) -> None:
    """
    Configure a minimal console logger for PSWARM.

    Notes:
        - This is opt-in (library code must not call logging.basicConfig()).
        - The handler is only attached if neither the root logger nor the "pswarm" logger has handlers.
    """
    root = logging.getLogger()
    pswarm_logger = logging.getLogger("pswarm")

    # If the user already configured logging, don't interfere.
    if root.handlers or pswarm_logger.handlers:
        return

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    pswarm_logger.addHandler(handler)
    pswarm_logger.setLevel(level)
    pswarm_logger.propagate = False


__all__ = ["configure_pswarm_logging"]
