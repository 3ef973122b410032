"""Host environment checks used before launching the discovery worker."""

import os
import shutil
import logging

logger = logging.getLogger(__name__)


def check_command_available(command: str) -> bool:
    """
    Check whether an executable can be resolved on this host.

    Args:
        command: Executable name looked up on PATH, or a path to it

    Returns:
        True if the command resolves to an executable file
    """
    if not command:
        return False
    return shutil.which(command) is not None


def should_load_data_sources(config) -> bool:
    """
    Check whether discovery can run: the interpreter resolves and every
    configured auxiliary path exists.

    Args:
        config: RegistryConfig instance
    """
    if not check_command_available(config.python_exec):
        logger.debug(f"Python executable not available: {config.python_exec}")
        return False

    missing = [path for path in config.python_paths if not os.path.exists(path)]
    if missing:
        logger.debug(f"Python paths missing, skipping data source lookup: {missing}")
        return False
    return True
