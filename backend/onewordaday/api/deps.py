from typing import Optional

from fastapi import Header, HTTPException, status

from ..config import settings
from ..core.ai_generator import AIWordGenerator, build_word_generator
from ..core.content_enrichment import WordBankEnricher, build_enricher


def get_current_user_id(x_user_id: Optional[str] = Header(None)) -> str:
    """Caller identity, set by the upstream authorizer."""
    if not x_user_id:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")
    return x_user_id


def get_word_generator() -> Optional[AIWordGenerator]:
    if not settings.use_ai_generation:
        return None
    return build_word_generator(settings)


def get_word_enricher() -> WordBankEnricher:
    return build_enricher(settings)
