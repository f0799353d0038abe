"""Parse endpoint for script syntax checking."""

from typing import Any, Dict, List

from fastapi import APIRouter
from pydantic import BaseModel, Field

from smartlang.errors import ParseError, ResourceExhausted
from smartlang.syntax.lexer import tokenize
from smartlang.syntax.nodes import ast_to_dict
from smartlang.syntax.parser import parse

router = APIRouter()


class ParseRequest(BaseModel):
    """Request body for parsing."""
    script: str


class ParseResponse(BaseModel):
    """Response body for parsing. `forms` is empty when the tree is too deep to dump."""
    valid: bool
    token_count: int = 0
    forms: List[Dict[str, Any]] = Field(default_factory=list)
    errors: List[str] = Field(default_factory=list)


@router.post("/parse", response_model=ParseResponse)
async def parse_script(request: ParseRequest):
    """Tokenize and parse a script, returning its AST."""
    tokens = tokenize(request.script)
    try:
        forms = parse(tokens)
    except ParseError as e:
        return ParseResponse(valid=False, token_count=len(tokens), errors=[f"{e.kind}: {e.message}"])

    try:
        dump = ast_to_dict(forms)
    except ResourceExhausted as e:
        return ParseResponse(valid=True, token_count=len(tokens), errors=[f"{e.kind}: {e.message}"])

    return ParseResponse(valid=True, token_count=len(tokens), forms=dump)
