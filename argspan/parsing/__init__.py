__all__ = [
    "Parser",
    "Tokenizer",
]

from argspan.parsing.parser import Parser
from argspan.parsing.tokenizer import Tokenizer
