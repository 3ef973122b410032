#!/usr/bin/env python3
"""
Data source lookup worker.

Runs inside the interpreter that will execute the data sources and reports
the ones published through an entry point group:

    python -m datasource_registry.worker.lookup_data_sources [group]

Prints ``{"names": [...], "handles": [...]}`` on stdout, where each handle
is the entry point's ``module:attr`` reference.
"""

import sys
import contextlib
import logging
from importlib.metadata import entry_points
from typing import List, Optional, Tuple

import orjson

from datasource_registry.config import DEFAULT_ENTRY_POINT_GROUP
from datasource_registry.datasource import DataSource

logger = logging.getLogger("datasource_registry.worker")


def lookup_data_sources(group: str = DEFAULT_ENTRY_POINT_GROUP) -> Tuple[List[str], List[str]]:
    """
    Collect the DataSource subclasses published under an entry point group.

    Entry points that fail to load, are not data sources, or whose name()
    fails are skipped. Output printed while loading them goes to stderr.

    Returns:
        Parallel lists of data source names and import references
    """
    names: List[str] = []
    handles: List[str] = []

    for ep in entry_points(group=group):
        # stdout carries the result document; plugin output goes to stderr
        with contextlib.redirect_stdout(sys.stderr):
            try:
                obj = ep.load()
                if not (isinstance(obj, type) and issubclass(obj, DataSource)):
                    logger.warning(f"Skipping entry point {ep.name}: {ep.value} is not a DataSource")
                    continue
                name = obj.name()
            except Exception as e:
                logger.warning(f"Skipping data source entry point {ep.name}: {e!r}")
                continue

        if not isinstance(name, str):
            logger.warning(f"Skipping entry point {ep.name}: name() returned {name!r}")
            continue

        names.append(name)
        handles.append(ep.value)

    return names, handles


def main(argv: Optional[List[str]] = None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    group = argv[0] if argv else DEFAULT_ENTRY_POINT_GROUP

    logging.basicConfig(
        level=logging.WARNING,
        stream=sys.stderr,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    try:
        names, handles = lookup_data_sources(group)
    except Exception as e:
        logger.error(f"Data source lookup failed: {e!r}")
        return 1

    sys.stdout.buffer.write(orjson.dumps({'names': names, 'handles': handles}))
    sys.stdout.buffer.flush()
    return 0


if __name__ == "__main__":
    sys.exit(main())
