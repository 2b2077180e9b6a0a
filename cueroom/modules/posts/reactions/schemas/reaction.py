from typing import Any, Dict, Optional
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

class ReactionRequest(BaseModel):
    # Any value is accepted here; the router answers anything outside the known types with 400
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    reaction_type: Optional[Any] = None

class ReactionCounts(BaseModel):
    """Per-type counts for a post, plus the caller's reaction when known"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    reactions: Dict[str, int]
    user_reaction: Optional[str] = None

class ReactionResult(ReactionCounts):
    """Response to a reaction mutation"""
    success: bool = True
