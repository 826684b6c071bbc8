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

__all__ = [
    "DKIMException",
    "InvalidCanonicalizationPolicyError",
    "KeyFormatError",
    "MessageFormatError",
    "MissingParamError",
    "ParameterError",
    "SigningError",
]


class DKIMException(Exception):
    """Base class for DKIM errors."""
    pass


class ParameterError(DKIMException):
    """Input parameter error."""
    pass


class KeyFormatError(ParameterError):
    """Key format error while parsing a private key."""
    pass


class MissingParamError(DKIMException):
    """A required signing parameter was not configured."""
    pass


class SigningError(DKIMException):
    """The signing primitive rejected the payload or key."""
    pass


class MessageFormatError(DKIMException):
    """Malformed DKIM tag=value list."""
    pass


class InvalidCanonicalizationPolicyError(DKIMException):
    """The c= value does not name a supported canonicalization."""
    pass
