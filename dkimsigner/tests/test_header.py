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

from dkimsigner.exceptions import MessageFormatError
from dkimsigner.header import DkimHeaderValue, fold

BODYHASH = '36+kqoyJsuwP2NJR3Fl95HuripBg2zfO++jH/8Df2LM='


class TestDkimHeaderValue(unittest.TestCase):

    def build(self, **kw):
        return DkimHeaderValue.build(
            algorithm='rsa-sha256', bodyhash=BODYHASH, domain='example.com',
            headers=['from', 'to', 'subject'], selector='202209', **kw)

    def test_empty_header(self):
        self.assertEqual(
            'v=1; a=rsa-sha256; bh=%s; c=relaxed/simple; d=example.com; '
            'h=from:to:subject; s=202209; b=' % BODYHASH, str(self.build()))

    def test_tag_order(self):
        self.assertEqual(
            ['v', 'a', 'bh', 'c', 'd', 'h', 's', 'b'],
            [k for k, v in self.build().tags])

    def test_identifier_precedes_signature(self):
        value = self.build(identifier='@example.com')
        self.assertEqual(
            ['v', 'a', 'bh', 'c', 'd', 'h', 's', 'i', 'b'],
            [k for k, v in value.tags])
        self.assertEqual('@example.com', value['i'])

    def test_with_signature(self):
        empty = self.build()
        signed = empty.with_signature('abc def')
        self.assertEqual(str(empty) + 'abc def', str(signed))
        self.assertEqual('', empty['b'])

    def test_lookup(self):
        value = self.build()
        self.assertEqual(BODYHASH, value['bh'])
        self.assertIn('s', value)
        self.assertNotIn('i', value)
        self.assertIsNone(value.get('i'))
        self.assertRaises(KeyError, lambda: value['x'])

    def test_parse(self):
        value = DkimHeaderValue.parse(str(self.build().with_signature('c2ln')))
        self.assertEqual(self.build().with_signature('c2ln'), value)

    def test_parse_folded(self):
        value = DkimHeaderValue.parse('v=1; a=rsa-sha256;\r\n d=example.com; b=ab\r\n cd')
        self.assertEqual('example.com', value['d'])
        self.assertEqual('ab\r\n cd', value['b'])

    def test_parse_invalid(self):
        for text in ('v=1; junk', 'v=1; v=1', '=1'):
            self.assertRaises(MessageFormatError, DkimHeaderValue.parse, text)

    def test_folded(self):
        value = self.build().with_signature(
            'Q5aDPnG2JKoDEIySzo93AMCH/lyjHaAvXlU5rqisCbFUG27vxgfMRsv02bnyuEUO8UbUnA/D9 '
            'CKCGJuIAJow1+8lD99zmA4ZYQqNqcQSeclSYky8FqCY1bcA8/uBEnHv8i3zISGUNSMMNReVfc '
            '/vG/WmZnWjF7RW1JV7bYYrI5w=')
        folded = value.folded()
        lines = folded.split('\r\n')
        self.assertTrue(len(lines) > 1)
        self.assertTrue(len('DKIM-Signature: ' + lines[0]) <= 78)
        for line in lines[1:]:
            self.assertTrue(line.startswith(' '), line)
            self.assertTrue(len(line) <= 78, line)
        self.assertEqual(str(value), folded.replace('\r\n', ''))

    def test_folded_long_header_list(self):
        names = ['from', 'to', 'cc', 'subject', 'date', 'message-id',
                 'reply-to', 'mime-version', 'content-type', 'in-reply-to']
        value = DkimHeaderValue.build(
            algorithm='rsa-sha256', bodyhash=BODYHASH, domain='example.com',
            headers=names, selector='202209')
        folded = value.folded()
        for line in folded.split('\r\n'):
            self.assertTrue(len(line) <= 78, line)
        h = DkimHeaderValue.parse(folded)['h']
        self.assertNotEqual(':'.join(names), h)
        self.assertEqual(':'.join(names), ''.join(h.split()))


class TestFold(unittest.TestCase):

    def test_short_value_unchanged(self):
        self.assertEqual('v=1; a=rsa-sha256', fold('v=1; a=rsa-sha256'))

    def test_breaks_at_spaces_only(self):
        text = ' '.join(['word%02d' % i for i in range(40)])
        folded = fold(text, 30)
        self.assertEqual(text, folded.replace('\r\n', ''))
        for line in folded.split('\r\n'):
            self.assertTrue(len(line) <= 30, line)

    def test_first_line_leaves_room_for_name(self):
        text = ' '.join(['word%02d' % i for i in range(40)])
        lines = fold(text, 30, 16).split('\r\n')
        self.assertTrue(len(lines[0]) <= 14, lines[0])
        self.assertTrue(len(lines[1]) > 14, lines[1])

    def test_breaks_after_colon_without_spaces(self):
        text = 'h=' + ':'.join(['header'] * 15) + ';'
        folded = fold(text)
        self.assertEqual(
            'h=' + 'header:' * 10 + '\r\n ' + 'header:' * 4 + 'header;',
            folded)

    def test_long_word_overflows(self):
        text = 'a ' + 'x' * 100 + ' b'
        self.assertEqual('a\r\n ' + 'x' * 100 + '\r\n b', fold(text, 20))
