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

from dkimsigner.exceptions import ParameterError

__all__ = [
    "DEFAULT_HEADERS",
    "SigningParams",
]

#: Header fields signed when the caller does not choose any.
DEFAULT_HEADERS = ('Date', 'From', 'Reply-To', 'Sender', 'Subject')

# RFC5322 field-name: printable ASCII except colon
FIELD_NAME = re.compile(r'[\x21-\x39\x3b-\x7e]+\Z')


class SigningParams(object):
    """Validated, immutable DKIM signing parameters.

    See U{RFC6376 section 3.5<https://www.rfc-editor.org/rfc/rfc6376#section-3.5>}.

    >>> params = SigningParams('example.com', 'sel1', ['Subject'])
    >>> params.headers
    ['subject', 'from']
    >>> params.canonicalization
    'relaxed/simple'
    """

    __slots__ = ('_domain', '_selector', '_headers', '_identifier')

    version = 1
    canonicalization = 'relaxed/simple'

    def __init__(self, domain, selector, headers=DEFAULT_HEADERS,
                 identifier=None):
        if not domain:
            raise ParameterError("Domain cannot be empty")
        if not selector:
            raise ParameterError("Selector cannot be empty")
        if identifier is not None and not identifier.endswith(domain):
            raise ParameterError("identity must end with domain")

        names = []
        for name in headers:
            if not FIELD_NAME.match(name):
                raise ParameterError("Invalid header field name: %r" % name)
            names.append(name.lower())
        # rfc6376 says From is required
        if 'from' not in names:
            names.append('from')

        self._domain = domain
        self._selector = selector
        self._headers = tuple(names)
        self._identifier = identifier

    @property
    def domain(self):
        return self._domain

    @property
    def selector(self):
        return self._selector

    @property
    def headers(self):
        """Lowercase header names to sign, in signing order."""
        return list(self._headers)

    @property
    def identifier(self):
        return self._identifier

    def __repr__(self):
        return "SigningParams(%r, %r, %r, identifier=%r)" % (
            self._domain, self._selector, list(self._headers), self._identifier)
