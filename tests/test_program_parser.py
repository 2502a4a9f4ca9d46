import unittest

from intcode.errors import MalformedProgramError
from intcode.program_parser import Parser, parse_program


class TestProgramParser(unittest.TestCase):
    def test_simple_program(self):
        self.assertEqual(parse_program("1,9,10,3,2,3,11,0,99,30,40,50"), [1, 9, 10, 3, 2, 3, 11, 0, 99, 30, 40, 50])

    def test_negative_values(self):
        self.assertEqual(parse_program("1101,100,-1,4,0"), [1101, 100, -1, 4, 0])

    def test_trailing_newline(self):
        """Puzzle input files end with a newline."""
        self.assertEqual(parse_program("3,0,4,0,99\n"), [3, 0, 4, 0, 99])

    def test_whitespace_around_commas(self):
        self.assertEqual(parse_program("  1 , 2,3 "), [1, 2, 3])

    def test_large_values(self):
        self.assertEqual(parse_program("104,1125899906842624,99"), [104, 1125899906842624, 99])

    def test_parser_keeps_text(self):
        parser = Parser()
        parser.parse_program(" 99\n")
        self.assertEqual(parser.text, "99")

    def test_malformed_programs(self):
        for text in ["", "   ", "1,,2", "1,2,", ",1", "1,a,3", "1 2", "1;2", "1.5,2", "- 1"]:
            with self.subTest(text=text):
                with self.assertRaises(MalformedProgramError):
                    parse_program(text)

    def test_malformed_program_reports_column(self):
        with self.assertRaises(MalformedProgramError) as ctx:
            parse_program("1,2,x")
        self.assertGreater(ctx.exception.column, 1)


if __name__ == '__main__':
    unittest.main()
