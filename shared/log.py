"""
Plugin logging helpers.

Every component logs through the standard logging tree under the
"CorrespondingReference" root so the host (or the entry script) decides
where the output goes. Messages carry a component prefix:
  [CorrespondingReference {component}] message

This module provides a factory to create log functions with a component prefix,
eliminating the need to build the prefix in every module.

Usage:
    from shared.log import create_logger
    log_trace, log_debug, log_info, log_warn, log_error = create_logger("Engine")
    log_info("Linked node 42")  # -> [CorrespondingReference Engine] Linked node 42
"""

import logging

TRACE = 5
logging.addLevelName(TRACE, "TRACE")

ROOT_LOGGER_NAME = "CorrespondingReference"


def create_logger(component: str = ""):
    """Create log functions for a component.

    Args:
        component: Component name suffix. If provided, prefix becomes
                   "[CorrespondingReference {component}]", otherwise
                   "[CorrespondingReference]".

    Returns:
        Tuple of (log_trace, log_debug, log_info, log_warn, log_error) functions.
    """
    prefix = f"[{ROOT_LOGGER_NAME} {component}]" if component else f"[{ROOT_LOGGER_NAME}]"
    name = f"{ROOT_LOGGER_NAME}.{component.lower().replace(' ', '_')}" if component else ROOT_LOGGER_NAME
    logger = logging.getLogger(name)

    def log_trace(msg): logger.log(TRACE, f"{prefix} {msg}")
    def log_debug(msg): logger.debug(f"{prefix} {msg}")
    def log_info(msg): logger.info(f"{prefix} {msg}")
    def log_warn(msg): logger.warning(f"{prefix} {msg}")
    def log_error(msg): logger.error(f"{prefix} {msg}")

    return log_trace, log_debug, log_info, log_warn, log_error
