from enum import Enum
from typing import NamedTuple

from mathplot.errors import BuildError, LocationalError


###############
## Tokenizer ##
###############

class Tokenizer():
    """Handles initial processing of an AOS input string."""

    def __init__(self, line: str):
        self.line = line
        self.index = 0

    def make_tokens(self) -> 'list[Token]':
        """
        Converts a string into a list of tokens by iteratively going over each
        character. Exceptions will be raised when a character is unrecognized.
        """
        tokens = []

        SINGLE_CHAR_TOKENS = {
            '(': TokenType.LPAREN,
            ')': TokenType.RPAREN,
            '+': TokenType.PLUS,
            '-': TokenType.MINUS,
            '*': TokenType.MUL,
            '/': TokenType.DIV,
            '^': TokenType.EXP,
        }

        while self.curr_char is not None:
            c = self.curr_char  # short variable name

            if c.isspace():
                self._skip_whitespace()
                continue

            index = self.index
            if c.isdigit() or c == '.':
                text = self._make_number()
                tokens.append(Token(TokenType.NUMBER, text, self, index))
                continue
            if c.isalpha() or c == '_':
                word = self._make_word()
                tokens.append(Token(TokenType.WORD, word, self, index))
                continue
            if c in SINGLE_CHAR_TOKENS:
                token_type = SINGLE_CHAR_TOKENS[c]
                tokens.append(Token(token_type, c, self, index))
                self._advance()
                continue

            # unrecognized character
            raise LocationalError(f"Unrecognized character '{c}'", self.line, index)

        return tokens

    def _make_number(self) -> str:
        """
        Advances over a numeric literal and returns its raw text. The value
        itself is parsed later by the tree builder.
        """
        found_period = False
        start = self.index

        while self.curr_char is not None and (self.curr_char.isdigit() or self.curr_char == '.'):
            if self.curr_char == '.':
                if found_period:
                    raise LocationalError('Unexpected period (.)', self.line, self.index)
                found_period = True
            self._advance()

        text = self.line[start:self.index]
        if text == '.':
            raise LocationalError('Invalid number', self.line, start)
        return text

    def _make_word(self) -> str:
        """
        Advances and makes a word (variable or function name).
        """
        start = self.index
        while self.curr_char is not None and (self.curr_char.isalnum() or self.curr_char == '_'):
            self._advance()
        return self.line[start:self.index]

    def _skip_whitespace(self):
        """
        Keeps advancing until the current character is no longer a space.
        """
        while self.curr_char is not None and self.curr_char.isspace():
            self._advance()

    def _advance(self):
        """
        Increments the index by 1 if able.
        """
        self.index += int(self.index < len(self.line))

    @property
    def curr_char(self) -> str | None:
        """
        Retrieves the current character, or None.
        """
        return self.line[self.index] if self.index < len(self.line) else None


class TokenType(Enum):
    NUMBER = 'Number'
    WORD = 'Word'
    LPAREN = '('
    RPAREN = ')'
    PLUS = '+'
    MINUS = '-'
    MUL = '*'
    DIV = '/'
    EXP = '^'


OPERATOR_TYPES = (TokenType.PLUS, TokenType.MINUS, TokenType.MUL, TokenType.DIV, TokenType.EXP)


class Token():
    def __init__(self, tok_type: TokenType, text: str, tokenizer: Tokenizer = None, index: int = 0):
        self.type = tok_type
        self.text = text
        self.tokenizer = tokenizer
        self.index = index

    @property
    def original_text(self) -> str:
        return self.tokenizer.line if self.tokenizer is not None else '<none>'

    @property
    def length(self) -> int:
        return len(self.text)

    @property
    def end(self) -> int:
        return self.index + self.length

    def throw(self, message: str):
        raise LocationalError(message, self.original_text, self.index, self.length)

    def __str__(self) -> str:
        return f'Token({self.type}, {self.text})'

    def __repr__(self) -> str:
        return self.__str__()


##############
## Splitter ##
##############

class Parts(NamedTuple):
    """The top-level node of an AOS string: operator or name plus operand substrings."""
    main: str
    left: str | None = None
    right: str | None = None


class AOSSplitter():
    """
    Reduces an AOS string to its top-level Parts. Only one level is split;
    the tree builder calls back in with the left and right substrings.
    """

    # lowest precedence first; the flag picks the rightmost candidate
    # (left-associative) or the leftmost one (right-associative)
    PRECEDENCE = (
        ((TokenType.PLUS, TokenType.MINUS), True),
        ((TokenType.MUL, TokenType.DIV), True),
        ((TokenType.EXP,), False),
    )

    def __init__(self, line: str):
        self.line = line
        self.tokens = Tokenizer(line).make_tokens()
        self.pairs = self._match_parens()

    def split(self) -> Parts:
        return self._split(0, len(self.tokens))

    def _split(self, lo: int, hi: int) -> Parts:
        lo, hi = self._strip_parens(lo, hi)
        if lo >= hi:
            raise BuildError('Empty expression')

        first = self.tokens[lo]
        signed = first.type in (TokenType.PLUS, TokenType.MINUS)

        for types, rightmost in self.PRECEDENCE:
            if signed and TokenType.EXP in types:
                # a leading sign binds looser than ^: -x^2 is -(x^2)
                break
            candidates = [i for i in self._top_level(lo, hi)
                          if self.tokens[i].type in types and not self._is_sign(lo, i)]
            if candidates:
                return self._binary(lo, candidates[-1] if rightmost else candidates[0], hi)

        if signed:
            if hi - lo == 1:
                first.throw('Missing operand')
            if first.type is TokenType.MINUS:
                return Parts('-', '0', self._text(lo + 1, hi))
            return self._split(lo + 1, hi)

        if (first.type is TokenType.WORD and hi - lo > 2
                and self.tokens[lo + 1].type is TokenType.LPAREN
                and self.pairs[lo + 1] == hi - 1):
            return Parts(first.text, self._text(lo + 2, hi - 1), None)

        if hi - lo == 1:
            return Parts(first.text)

        self.tokens[lo + 1].throw('Unexpected token')

    def _binary(self, lo: int, i: int, hi: int) -> Parts:
        op = self.tokens[i]
        if i == lo or i == hi - 1:
            op.throw('Missing operand')
        return Parts(op.text, self._text(lo, i), self._text(i + 1, hi))

    def _top_level(self, lo: int, hi: int) -> 'list[int]':
        """Indices of the tokens in [lo, hi) outside of any parentheses."""
        indices = []
        depth = 0
        for i in range(lo, hi):
            tok_type = self.tokens[i].type
            if tok_type is TokenType.LPAREN:
                depth += 1
            elif tok_type is TokenType.RPAREN:
                depth -= 1
            elif depth == 0:
                indices.append(i)
        return indices

    def _is_sign(self, lo: int, i: int) -> bool:
        """A + or - with nothing to its left is a sign, not a binary operator."""
        if self.tokens[i].type not in (TokenType.PLUS, TokenType.MINUS):
            return False
        if i == lo:
            return True
        prev = self.tokens[i - 1].type
        return prev in OPERATOR_TYPES or prev is TokenType.LPAREN

    def _strip_parens(self, lo: int, hi: int) -> 'tuple[int, int]':
        while (hi - lo >= 2 and self.tokens[lo].type is TokenType.LPAREN
               and self.pairs[lo] == hi - 1):
            lo += 1
            hi -= 1
        return lo, hi

    def _match_parens(self) -> 'dict[int, int]':
        pairs = {}
        stack = []
        for i, token in enumerate(self.tokens):
            if token.type is TokenType.LPAREN:
                stack.append(i)
            elif token.type is TokenType.RPAREN:
                if not stack:
                    token.throw('Unmatched ")"')
                pairs[stack.pop()] = i
        if stack:
            self.tokens[stack[-1]].throw('Unmatched "("')
        return pairs

    def _text(self, lo: int, hi: int) -> str:
        if lo >= hi:
            return ''
        return self.line[self.tokens[lo].index:self.tokens[hi - 1].end].strip()


def split_aos(text: str) -> Parts:
    return AOSSplitter(text).split()


###############
## RPN Lexer ##
###############

class RPNLexer():
    """Splits an RPN string into its whitespace-delimited tokens."""

    def __init__(self, line: str):
        self.line = line

    def make_tokens(self) -> 'list[str]':
        return self.line.split()
