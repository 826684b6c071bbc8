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

import re

from dkimsigner.exceptions import InvalidCanonicalizationPolicyError

__all__ = [
    'canonicalize_body',
    'canonicalize_header_block',
    'canonicalize_header_value',
    'CanonicalizationPolicy',
    'InvalidCanonicalizationPolicyError',
    'select_headers',
    ]

# Any line break sequence: CRLF, LF, CR, VT, FF, NEL, LS or PS.
LINE_BREAK = re.compile('\r\n|[\n\r\x0b\x0c\x85\u2028\u2029]')


def compress_whitespace(content):
    return re.sub(r"\s+", " ", content, flags=re.ASCII)


def normalize_line_endings(content):
    return LINE_BREAK.sub("\r\n", content)


def strip_trailing_lines(content):
    return content.rstrip("\r\n") + "\r\n"


def select_headers(headers, include_headers):
    """Select message header fields to be signed.

    The first instance of each name is used; names missing from the
    message are skipped.

    >>> h = [('From','biz'),('Foo','bar'),('from','baz'),('Subject','boring')]
    >>> i = ['from','subject','to']
    >>> select_headers(h,i)
    [('From', 'biz'), ('Subject', 'boring')]
    """
    sign_headers = []
    for name in include_headers:
        name = name.lower()
        for header in headers:
            if header[0].lower() == name:
                sign_headers.append(header)
                break
    return sign_headers


class Simple:
    """The body canonicalization used for c=.../simple.

    Line breaks are normalized to CRLF and the empty lines at the end of
    the body are dropped, leaving exactly one trailing CRLF.
    """

    name = "simple"

    @staticmethod
    def canonicalize_body(body):
        return strip_trailing_lines(normalize_line_endings(body))


class Relaxed:
    """The "relaxed" header canonicalization algorithm."""

    name = "relaxed"

    @staticmethod
    def canonicalize_header(name, value):
        # Convert the header field name to lowercase.
        # Unfold and compress WSP to a single space.
        # Remove all WSP at the start or end of the field value (strip).
        return "%s:%s" % (name.lower().rstrip(),
                          compress_whitespace(value).strip())

    @classmethod
    def canonicalize_headers(cls, headers):
        return [cls.canonicalize_header(x, y) for x, y in headers]


class CanonicalizationPolicy:
    def __init__(self, header_algorithm, body_algorithm):
        self.header_algorithm = header_algorithm
        self.body_algorithm = body_algorithm

    @classmethod
    def from_c_value(cls, canonicalization):
        """Construct the canonicalization policy described by a c= value.

        May raise an C{InvalidCanonicalizationPolicyError} if the given
        value is not supported.

        >>> CanonicalizationPolicy.from_c_value('relaxed/simple').to_c_value()
        'relaxed/simple'

        @param canonicalization: c= value from a DKIM-Signature header field
        @return: a C{CanonicalizationPolicy}
        """
        parts = canonicalization.split('/')
        if len(parts) != 2:
            raise InvalidCanonicalizationPolicyError(canonicalization)
        try:
            header_algorithm = HEADER_ALGORITHMS[parts[0]]
            body_algorithm = BODY_ALGORITHMS[parts[1]]
        except KeyError as err:
            raise InvalidCanonicalizationPolicyError(err.args[0])
        return cls(header_algorithm, body_algorithm)

    def to_c_value(self):
        return '/'.join((self.header_algorithm.name, self.body_algorithm.name))

    def canonicalize_header_block(self, headers, include_headers):
        """Return the canonical header block for the selected headers.

        Each header is terminated by CRLF except the last one.
        """
        lines = self.header_algorithm.canonicalize_headers(
            select_headers(headers, include_headers))
        return ''.join(x + "\r\n" for x in lines).rstrip("\r\n")

    def canonicalize_body(self, body):
        return self.body_algorithm.canonicalize_body(body)


HEADER_ALGORITHMS = dict((c.name, c) for c in (Relaxed,))
BODY_ALGORITHMS = dict((c.name, c) for c in (Simple,))

RELAXED_SIMPLE = CanonicalizationPolicy(Relaxed, Simple)


def canonicalize_header_value(name, value):
    """Canonicalize one header field with the relaxed algorithm.

    >>> canonicalize_header_value('Subject', '  Subject \\r\\n  Subject  ')
    'subject:Subject Subject'
    """
    return Relaxed.canonicalize_header(name, value)


def canonicalize_header_block(headers, include_headers):
    """Canonicalize the C{include_headers} found in C{headers}.

    >>> canonicalize_header_block([('To', 'a'), ('From', ' b ')], ['from', 'to'])
    'from:b\\r\\nto:a'
    """
    return RELAXED_SIMPLE.canonicalize_header_block(headers, include_headers)


def canonicalize_body(body):
    """Canonicalize a message body.

    >>> canonicalize_body('a\\nb\\n\\n')
    'a\\r\\nb\\r\\n'
    >>> canonicalize_body('')
    '\\r\\n'
    """
    return Simple.canonicalize_body(body)
