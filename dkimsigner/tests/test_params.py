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

import unittest

from dkimsigner import ParameterError, SigningParams


class TestSigningParams(unittest.TestCase):

    def test_constructor_sets_params(self):
        params = SigningParams('example.com', 'sel1', ['date', 'from', 'subject'])
        self.assertEqual('example.com', params.domain)
        self.assertEqual('sel1', params.selector)
        self.assertEqual(['date', 'from', 'subject'], params.headers)

    def test_constructor_sets_defaults(self):
        params = SigningParams('example.com', 'sel1')
        self.assertEqual(
            ['date', 'from', 'reply-to', 'sender', 'subject'], params.headers)
        self.assertEqual(1, params.version)
        self.assertEqual('relaxed/simple', params.canonicalization)
        self.assertIsNone(params.identifier)

    def test_headers_are_lowercased(self):
        params = SigningParams('example.com', 'sel1', ['From', 'To', 'Subject'])
        self.assertEqual(['from', 'to', 'subject'], params.headers)

    def test_empty_headers_adds_from(self):
        params = SigningParams('example.com', 'sel1', [])
        self.assertEqual(['from'], params.headers)

    def test_from_appended_after_caller_order(self):
        params = SigningParams('example.com', 'sel1', ['To', 'Subject'])
        self.assertEqual(['to', 'subject', 'from'], params.headers)

    def test_from_is_matched_case_insensitively(self):
        params = SigningParams('example.com', 'sel1', ['FROM', 'To'])
        self.assertEqual(['from', 'to'], params.headers)

    def test_empty_domain(self):
        with self.assertRaisesRegex(ParameterError, "Domain cannot be empty"):
            SigningParams('', 'sel1')

    def test_empty_selector(self):
        with self.assertRaisesRegex(ParameterError, "Selector cannot be empty"):
            SigningParams('example.com', '')

    def test_invalid_header_names(self):
        for name in ('', 'Reply To', 'to:cc', 'Subject\n'):
            self.assertRaises(
                ParameterError, SigningParams, 'example.com', 'sel1', [name])

    def test_header_name_with_trailing_newline(self):
        with self.assertRaisesRegex(ParameterError, "Invalid header field name"):
            SigningParams('example.com', 'sel1', ['From', 'Subject\n'])

    def test_identifier(self):
        params = SigningParams(
            'example.com', 'sel1', identifier='@mail.example.com')
        self.assertEqual('@mail.example.com', params.identifier)

    def test_identifier_outside_domain(self):
        with self.assertRaisesRegex(ParameterError, "identity must end with domain"):
            SigningParams('example.com', 'sel1', identifier='@example.org')

    def test_headers_is_a_copy(self):
        params = SigningParams('example.com', 'sel1', ['From'])
        params.headers.append('to')
        self.assertEqual(['from'], params.headers)

    def test_immutable(self):
        params = SigningParams('example.com', 'sel1')
        with self.assertRaises(AttributeError):
            params.domain = 'example.org'
        with self.assertRaises(AttributeError):
            params.version = 2
