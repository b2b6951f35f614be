"""Sharding of binary ids into relative directory paths"""

import logging
import re
from binarystore.binarystore_config import DIR_WIDTH
from binarystore.filebinarystore_exceptions import InvalidConfiguration

# Anything that is not a letter, digit or underscore
NON_WORD_CHARS = re.compile(r"\W+")


def sanitize(binary_id):
    """Remove every non-word character from a binary id.

    :param str binary_id: Id of the binary.

    :return: The sequence of characters used to build the sharded path.
    :rtype: str
    """
    return NON_WORD_CHARS.sub("", binary_id)


def shard_path(binary_id, depth):
    """Build the relative directory path of a binary from its id. The sanitized id is cut
    into segments of `DIR_WIDTH` characters, each one closed with a '/', until `depth`
    segments have been emitted. A trailing segment shorter than `DIR_WIDTH` is still
    closed with a '/'.

    Example (depth 3):
        '105cbe4c-49f8-450c-9245-0b611d25d80c' -> '105/cbe/4c4/'

    :param str binary_id: Id of the binary.
    :param int depth: Number of directory segments to emit.

    :raises InvalidConfiguration: If depth is negative.

    :return: Relative directory path, empty when depth is 0.
    :rtype: str
    """
    if depth < 0:
        exception_string = f"pathsharder - shard_path: depth must be >= 0, depth: {depth}"
        logging.error(exception_string)
        raise InvalidConfiguration(exception_string)

    sequence = sanitize(binary_id)
    length = len(sequence)
    path = []
    level = 0

    for index, char in enumerate(sequence):
        if level >= depth:
            break
        path.append(char)
        if (index + 1) % DIR_WIDTH == 0:
            level += 1
            path.append("/")
        elif index == length - 1:
            path.append("/")

    return "".join(path)
