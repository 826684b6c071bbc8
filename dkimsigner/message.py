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

"""Access to L{email.message.Message} objects in the form DKIM needs.

Headers are read in their encoded wire form, as the message policy
would write them, and bodies are rendered to text with CRLF line
endings.
"""

import copy
import io
from email.generator import Generator

__all__ = [
    "body_text",
    "clone_message",
    "encoded_headers",
    "encoded_value",
    "replace_headers",
    "set_body",
]

CRLF = "\r\n"


def clone_message(message):
    """Return an independent copy of C{message}, including every MIME part."""
    return copy.deepcopy(message)


def encoded_value(message, name, value):
    """Return the field value of a header as the message policy folds it.

    Non-ASCII text comes back as RFC 2047 encoded words.
    """
    folded = message.policy.fold(name, value)
    return folded.split(':', 1)[1]


def encoded_headers(message):
    """Return (name, encoded value) pairs for every header, in order.

    Stored values are folded the way a generator writes them, so a value
    set already folded comes back with its own line breaks.
    """
    return [(name, encoded_value(message, name, value))
            for name, value in message.raw_items()]


def render_body(message):
    """Render the body of a multipart message to its wire text.

    A MIME boundary is generated, and set on C{message}, when it has none.
    """
    fp = io.StringIO()
    g = Generator(fp, mangle_from_=False,
                  policy=message.policy.clone(linesep=CRLF))
    g.flatten(message, unixfrom=False)
    text = fp.getvalue()
    if text.startswith(CRLF):
        # no headers at all
        return text[len(CRLF):]
    return text.partition(CRLF + CRLF)[2]


def body_text(message):
    """Return the body of C{message} as text."""
    if message.is_multipart():
        return render_body(message)
    payload = message.get_payload()
    if payload is None:
        return ''
    return str(payload)


def set_body(message, body):
    """Replace the body of C{message} with the text C{body}.

    Multipart messages keep their headers; the generator writes a string
    payload out verbatim.
    """
    message.set_payload(body)


def replace_headers(message, headers):
    """Replace all headers of C{message} with C{headers}, keeping their order.

    Values are stored as given, without the policy's parsing or its limit
    on how often a header may appear.

    @param headers: a list of (name, value) pairs, e.g. from C{raw_items()}
    """
    for name in set(message.keys()):
        del message[name]
    for name, value in headers:
        message.set_raw(name, value)
