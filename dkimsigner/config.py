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

from dkimsigner import Signer
from dkimsigner.crypto import load_private_key
from dkimsigner.exceptions import MissingParamError
from dkimsigner.params import (
    DEFAULT_HEADERS,
    SigningParams,
    )

__all__ = [
    "signer_from_config",
]


def signer_from_config(config, logger=None):
    """Build a L{Signer} from the C{dkim} entry of a configuration mapping.

    The entry looks like::

        {'dkim': {
            'private_key': '<PEM body>',
            'algorithm': 'rsa-sha256',          # optional
            'params': {
                'domain': 'example.com',
                'selector': 'sel1',
                'headers': ['From', 'To', 'Subject'],   # optional
                'identifier': '@example.com',           # optional
            },
        }}

    @param config: the application configuration
    @param logger: passed on to the L{Signer}
    @raise MissingParamError: when the dkim entry, its params or its
    private key are missing
    """
    try:
        dkim = config['dkim']
    except KeyError:
        raise MissingParamError("No 'dkim' config set")
    params = dkim.get('params')
    if params is None:
        raise MissingParamError("No dkim params config set")
    private_key = dkim.get('private_key')
    if not private_key:
        raise MissingParamError("No dkim private key set")

    signing_params = SigningParams(
        params.get('domain', ''),
        params.get('selector', ''),
        params.get('headers', DEFAULT_HEADERS),
        identifier=params.get('identifier'),
    )
    key = load_private_key(private_key, dkim.get('algorithm', 'rsa-sha256'))
    return Signer(signing_params, key, logger=logger)
