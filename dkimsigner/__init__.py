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

import base64

from dkimsigner.canonicalization import CanonicalizationPolicy
from dkimsigner.crypto import (
    Ed25519Sha256PrivateKey,
    HASH_ALGORITHMS,
    load_private_key,
    PrivateKey,
    RsaSha256PrivateKey,
    )
from dkimsigner.exceptions import (
    DKIMException,
    InvalidCanonicalizationPolicyError,
    KeyFormatError,
    MessageFormatError,
    MissingParamError,
    ParameterError,
    SigningError,
    )
from dkimsigner.header import (
    DkimHeaderValue,
    HEADER_NAME,
    )
from dkimsigner.message import (
    body_text,
    clone_message,
    encoded_headers,
    replace_headers,
    set_body,
    )
from dkimsigner.params import (
    DEFAULT_HEADERS,
    SigningParams,
    )
from dkimsigner.util import get_default_logger

__all__ = [
    "DKIMException",
    "DkimHeaderValue",
    "Ed25519Sha256PrivateKey",
    "InvalidCanonicalizationPolicyError",
    "KeyFormatError",
    "MessageFormatError",
    "MissingParamError",
    "ParameterError",
    "PrivateKey",
    "RsaSha256PrivateKey",
    "Signer",
    "SigningError",
    "SigningParams",
    "sign_message",
]

# Text reaching the signer may carry raw 8bit bytes as surrogate escapes.
ENCODING = ('utf-8', 'surrogateescape')


class Signer(object):
    """Sign email messages with a DKIM-Signature header field.

    A signer pairs one L{SigningParams} with one L{PrivateKey}.  It keeps
    no state between calls, so one instance may sign any number of
    messages, concurrently if need be.

    @param params: the signing parameters
    @param private_key: a L{PrivateKey}, e.g. L{RsaSha256PrivateKey}
    @param logger: a logger to which debug info will be written (default None)
    """

    def __init__(self, params, private_key, logger=None):
        if logger is None:
            logger = get_default_logger()
        self.logger = logger
        self.params = params
        self.private_key = private_key
        self.canonicalization = CanonicalizationPolicy.from_c_value(
            params.canonicalization)
        try:
            self.hasher = HASH_ALGORITHMS[private_key.algorithm]
        except KeyError:
            raise ParameterError(
                "Unsupported signature algorithm: %s" % private_key.algorithm)

    def sign_message(self, message):
        """Return a signed copy of C{message}.

        The copy has its body canonicalized and a DKIM-Signature header
        field as its first header.  C{message} itself is left untouched.

        @param message: an L{email.message.Message}
        @return: the signed copy
        @raise DKIMException: when the message cannot be signed
        """
        signed, _ = self._sign(message)
        return signed

    def sign_header(self, message):
        """Sign C{message} and return only the DKIM-Signature header line.

        The value is folded for transport and the line is terminated by
        CRLF, ready to be prepended to the message as it is sent.
        """
        _, dkim = self._sign(message)
        return "%s: %s\r\n" % (HEADER_NAME, dkim.folded())

    def _sign(self, message):
        clone = clone_message(message)

        body = self.canonicalization.canonicalize_body(body_text(clone))
        set_body(clone, body)

        empty = self.empty_header(body)
        if clone.get(HEADER_NAME) is not None:
            self.logger.warning(
                "replacing existing %s header field" % HEADER_NAME)
            del clone[HEADER_NAME]

        # add empty (unsigned) dkim header, folded as it will be written
        clone.set_raw(HEADER_NAME, empty.folded())

        canonical = self.canonical_headers(clone)
        signature = self.generate_signature(canonical)

        del clone[HEADER_NAME]
        dkim = empty.with_signature(signature)
        replace_headers(
            clone, [(HEADER_NAME, dkim.folded())] + list(clone.raw_items()))
        return clone, dkim

    def body_hash(self, body):
        """Return the base64 encoded hash of a canonical body."""
        h = self.hasher()
        h.update(body.encode(*ENCODING))
        return base64.b64encode(h.digest()).decode('ascii')

    def empty_header(self, body):
        """Return the DKIM-Signature value with an empty b= tag."""
        params = self.params
        bodyhash = self.body_hash(body)
        self.logger.debug("bh: %s" % bodyhash)
        return DkimHeaderValue.build(
            algorithm=self.private_key.algorithm,
            bodyhash=bodyhash,
            domain=params.domain,
            headers=params.headers,
            selector=params.selector,
            version=params.version,
            canonicalization=params.canonicalization,
            identifier=params.identifier,
        )

    def include_headers(self):
        include_headers = self.params.headers
        if HEADER_NAME.lower() not in include_headers:
            include_headers.append(HEADER_NAME.lower())
        return include_headers

    def canonical_headers(self, message):
        """Return the canonical header block of C{message} to be signed."""
        canonical = self.canonicalization.canonicalize_header_block(
            encoded_headers(message), self.include_headers())
        self.logger.debug("sign headers: %r" % canonical)
        return canonical

    def generate_signature(self, canonical):
        try:
            return self.private_key.sign(canonical.encode(*ENCODING))
        except ValueError as e:
            raise SigningError("Unable to sign message: %s" % e)


def sign_message(message, domain, selector, private_key, headers=None,
                 identifier=None, algorithm='rsa-sha256', logger=None):
    """Sign an email message and return the signed copy.

    @param message: an L{email.message.Message}
    @param domain: the DKIM domain value for the signature
    @param selector: the DKIM selector value for the signature
    @param private_key: a L{PrivateKey}, or key material for C{algorithm}
    @param headers: a list of header field names to sign (default
    L{DEFAULT_HEADERS})
    @param identifier: the DKIM identity value for the signature (default None)
    @param algorithm: the signing algorithm when C{private_key} is key
    material (default rsa-sha256)
    @param logger: a logger to which debug info will be written (default None)
    @return: a copy of C{message} with a DKIM-Signature header field first
    @raise DKIMException: when the parameters, key or message are badly formed.
    """
    if headers is None:
        headers = DEFAULT_HEADERS
    params = SigningParams(domain, selector, headers, identifier=identifier)
    if not isinstance(private_key, PrivateKey):
        private_key = load_private_key(private_key, algorithm)
    return Signer(params, private_key, logger=logger).sign_message(message)
