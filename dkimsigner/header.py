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

from dkimsigner.exceptions import MessageFormatError
from dkimsigner.util import (
    InvalidTagValueList,
    parse_tag_value,
    )

__all__ = [
    "DkimHeaderValue",
    "fold",
    "HEADER_NAME",
]

HEADER_NAME = 'DKIM-Signature'


def fold(header, width=78, namelen=0):
    """Fold a header value into crlf-separated lines of C{width} columns.

    The first line leaves room for C{namelen} columns of field name and
    colon.  Lines are broken in front of an existing space, so unfolding
    gives back the value unchanged.  A run with no space in it is broken
    after a colon, which only occurs in the h= list (RFC6376 section 3.5
    allows FWS there).  A word with neither is left to overflow.

    >>> fold('foo')
    'foo'
    >>> len(fold('foo ' * 25).splitlines()[0])
    75
    >>> fold('foo ' * 25).splitlines()[-1]
    ' foo foo foo foo foo foo '
    >>> len(fold('foo ' * 25, namelen=16).splitlines()[0])
    59
    >>> fold('h=' + ':'.join(['header'] * 15) + ';').splitlines()[-1]
    ' header:header:header:header:header;'
    >>> fold('x' * 80) == 'x' * 80
    True
    """
    pre = ""
    limit = width - namelen
    while len(header) > limit:
        i = header.rfind(" ", 1, limit)
        if i > 0:
            pre += header[:i] + "\r\n"
            header = header[i:]
        else:
            i = header.rfind(":", 0, limit - 1)
            if i > 0:
                pre += header[:i + 1] + "\r\n"
                header = " " + header[i + 1:]
            else:
                i = header.find(" ", limit)
                if i == -1:
                    break
                pre += header[:i] + "\r\n"
                header = header[i:]
        limit = width
    return pre + header


class DkimHeaderValue(object):
    """The tag=value list of a DKIM-Signature header field.

    Tags keep the order they were given in.  The value renders as
    C{tag=value} pairs joined by C{"; "}, without a trailing semicolon.

    >>> value = DkimHeaderValue([('v', '1'), ('d', 'example.com'), ('b', '')])
    >>> str(value)
    'v=1; d=example.com; b='
    >>> str(value.with_signature('c2ln'))
    'v=1; d=example.com; b=c2ln'
    """

    def __init__(self, tags):
        self.tags = [(str(k), str(v)) for k, v in tags]

    @classmethod
    def build(cls, algorithm, bodyhash, domain, headers, selector,
              version=1, canonicalization='relaxed/simple', identifier=None,
              signature=''):
        """Build a value with the tags in signing order.

        @param headers: the header field names for the h= tag
        @param identifier: the i= value, left out when None
        """
        tags = [
            ('v', version),
            ('a', algorithm),
            ('bh', bodyhash),
            ('c', canonicalization),
            ('d', domain),
            ('h', ':'.join(headers)),
            ('s', selector),
        ]
        if identifier is not None:
            tags.append(('i', identifier))
        tags.append(('b', signature))
        return cls(tags)

    @classmethod
    def parse(cls, value):
        """Parse a DKIM-Signature field value.

        @raise MessageFormatError: when the value is not a tag=value list
        """
        try:
            return cls(parse_tag_value(str(value)).items())
        except InvalidTagValueList as e:
            raise MessageFormatError("invalid tag list: %s" % e)

    def __getitem__(self, tag):
        for k, v in self.tags:
            if k == tag:
                return v
        raise KeyError(tag)

    def __contains__(self, tag):
        return any(k == tag for k, v in self.tags)

    def get(self, tag, default=None):
        try:
            return self[tag]
        except KeyError:
            return default

    def with_signature(self, signature):
        """Return a copy with the b= tag set to C{signature}."""
        tags = [(k, v) for k, v in self.tags if k != 'b']
        tags.append(('b', signature))
        return self.__class__(tags)

    def folded(self, width=78):
        """Return the value folded to follow C{"DKIM-Signature: "}."""
        return fold(str(self), width, len(HEADER_NAME) + 2)

    def __str__(self):
        return "; ".join("%s=%s" % x for x in self.tags)

    def __repr__(self):
        return "<DkimHeaderValue %s>" % self

    def __eq__(self, other):
        if not isinstance(other, DkimHeaderValue):
            return NotImplemented
        return self.tags == other.tags

    __hash__ = None
