"""Protostruct schema compiler."""

from .loader import InvalidPath as InvalidPath
from .loader import IoFailure as IoFailure
from .loader import load as load
from .parser import DuplicateName as DuplicateName
from .parser import MalformedField as MalformedField
from .parser import MalformedMessageHeader as MalformedMessageHeader
from .parser import MissingSemicolon as MissingSemicolon
from .parser import ParseError as ParseError
from .parser import UnbalancedBrace as UnbalancedBrace
from .parser import UnsupportedSyntax as UnsupportedSyntax
from .parser import parse as parse
from .python import render as render
from .python import synthesize as synthesize
from .types import FieldDescriptor as FieldDescriptor
from .types import MessageDescriptor as MessageDescriptor
from .types import SchemaDocument as SchemaDocument
