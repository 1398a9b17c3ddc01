# Copyright (c) 2013-2026 NASK. All rights reserved.

import collections
import logging
import os.path
import sys


TOPLEVEL_PACKAGE_NAME = __name__.partition('.')[0]


def get_logger(name=None):
    """
    Like logging.getLogger(...) but replacing '__main__' with a sensible name.

    For example, if the script path is '/whatever/paramschema/tools/foo.py'
    get_logger('__main__') is equivalent to
    logging.getLogger('paramschema.tools.foo').
    """
    if name == '__main__':
        # try to get the script path from __main__.__file__
        script_path = getattr(sys.modules['__main__'], '__file__', None)
        if not script_path:
            # or, if __main__ does not have a non-blank __file__ attribute,
            # extract the script path from sys.argv...
            script_path = sys.argv[0]
        # strip off the filename extension...
        remaining = os.path.splitext(script_path)[0]
        # ..and pop path name segments up to
        # (and including) the toplevel package name
        aggregated_segments = collections.deque()
        while True:
            remaining, segment = os.path.split(remaining)
            segment = segment.replace('.', 'D')  # just in case of '.' or '..'
            aggregated_segments.appendleft(segment)
            if segment == TOPLEVEL_PACKAGE_NAME or remaining in ('', '/'):
                break
        name = '.'.join(aggregated_segments)
    return logging.getLogger(name)


def install_null_handler():  # called in paramschema/__init__.py
    """
    Make the library silent unless the application configures logging.
    """
    logger = logging.getLogger(TOPLEVEL_PACKAGE_NAME)
    if not any(isinstance(h, logging.NullHandler) for h in logger.handlers):
        logger.addHandler(logging.NullHandler())
