# Copyright (c) 2025 Kenneth Stott
#
# This source code is licensed under the Business Source License 1.1
# found in the LICENSE file in the root directory of this source tree.
#
# NOTICE: Use of this software for training artificial intelligence or
# machine learning models is strictly prohibited without explicit written
# permission from the copyright holder.

"""Recover descriptions from comments written above a node in source text.

The GraphQL AST drops ``#`` comments, so a variable or argument documented
with a comment has no description of its own. The text between the parent
node's start and the node's start still contains it.
"""

import re
from typing import Callable, Optional

_SINGLE_LINE_COMMENT = re.compile(r"#(.*)$")
_BLOCK_COMMENT = re.compile(r'"""((?!""")[\s\S])*"""$')

_MATCHERS: list[tuple[re.Pattern, Callable[[str], str]]] = [
    # drop the leading '#'
    (_SINGLE_LINE_COMMENT, lambda match: match[1:].strip()),
    # drop the surrounding '"""'
    (_BLOCK_COMMENT, lambda match: match[3:-3].strip()),
]


def resolve_description(
    source: str,
    node_start: Optional[int],
    parent_start: Optional[int],
) -> Optional[str]:
    """
    Find the comment immediately preceding a node.

    Args:
        source: Full source text the positions refer to
        node_start: Offset where the node begins
        parent_start: Offset where the enclosing node (or previous sibling) begins

    Returns:
        Comment text without delimiters, or None when there is no comment
    """
    if node_start is None or parent_start is None:
        return None

    content = source[parent_start:node_start].strip()

    for pattern, clean in _MATCHERS:
        match = pattern.search(content)
        if not match:
            continue
        return clean(match.group(0)) or None

    return None
