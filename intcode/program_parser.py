from typing import List

from pyparsing import DelimitedList, ParseException, Regex

from intcode.errors import MalformedProgramError


class Parser:
    def __init__(self):
        self.text = ""

    def make_integer(self, tokens):
        return int(tokens[0])

    def parse_program(self, text: str) -> List[int]:
        integer = Regex(r"-?\d+")
        integer.set_parse_action(self.make_integer)
        program = DelimitedList(integer)
        self.text = text.strip()
        try:
            return list(program.parse_string(self.text, parse_all=True))
        except ParseException as e:
            raise MalformedProgramError(self.text[e.loc:e.loc + 20], e.col) from e


def parse_program(text: str) -> List[int]:
    """Convenience function to parse a program."""
    return Parser().parse_program(text)
