import sys

from toyc.interpreter.interpreter import Interpreter
from toyc.ir.program import Program
from toyc.ir.reader import IRReader
from toyc.parser.parser import Parser
from toyc.scanner.scanner import Scanner
from toyc.token import Token
from toyc.type import Type

# Default is 1000, expressions and if-else chains are translated recursively
sys.setrecursionlimit(5000)
