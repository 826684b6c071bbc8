# This software is provided 'as-is', without any express or implied
# warranty.  In no event will the author be held liable for any damages
# arising from the use of this software.
#
# Permission is granted to anyone to use this software for any purpose,
# including commercial applications, and to alter it and redistribute it
# freely, subject to the following restrictions:
#
# 1. The origin of this software must not be misrepresented; you must not
#    claim that you wrote the original software. If you use this software
#    in a product, an acknowledgment in the product documentation would be
#    appreciated but is not required.
# 2. Altered source versions must be plainly marked as such, and must not be
#    misrepresented as being the original software.
# 3. This notice may not be removed or altered from any source distribution.
#
# Copyright (c) 2008 Greg Hewgill http://hewgill.com
#
# This has been modified from the original software.
# Copyright (c) 2011 William Grant <me@williamgrant.id.au>

import logging
import re

__all__ = [
    "DuplicateTag",
    "get_default_logger",
    "InvalidTagValueList",
    "parse_tag_value",
]


class InvalidTagValueList(Exception):
    pass


class DuplicateTag(InvalidTagValueList):
    pass


def parse_tag_value(tag_list):
    """Parse a DKIM Tag=Value list.

    Interprets the syntax specified by RFC6376 section 3.2.
    Whitespace around tags and values is ignored; folding whitespace
    inside a value is kept.

    >>> sorted(parse_tag_value('v=1; a=rsa-sha256; d=example.com;').items())
    [('a', 'rsa-sha256'), ('d', 'example.com'), ('v', '1')]
    >>> parse_tag_value('v=1; v=2')
    Traceback (most recent call last):
    ...
    dkimsigner.util.DuplicateTag: v

    @param tag_list: A string containing a DKIM Tag=Value list.
    @return: a dict of tag to value, in the order the tags appear.
    """
    tags = {}
    tag_specs = tag_list.strip().split(';')
    # Trailing semicolons are valid.
    if not tag_specs[-1].strip():
        tag_specs.pop()
    for tag_spec in tag_specs:
        try:
            key, value = [x.strip() for x in tag_spec.split('=', 1)]
        except ValueError:
            raise InvalidTagValueList(tag_spec)
        if re.match(r'^[a-zA-Z]\w*$', key) is None:
            raise InvalidTagValueList(tag_spec)
        if key in tags:
            raise DuplicateTag(key)
        tags[key] = value
    return tags


def get_default_logger():
    """Get the default dkimsigner logger."""
    logger = logging.getLogger('dkimsigner')
    if not logger.handlers:
        logger.addHandler(logging.NullHandler())
    return logger
