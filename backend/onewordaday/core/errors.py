class WordNotFound(Exception):
    """No stored word for a past date; history is never backfilled."""

    def __init__(self, user_id: str, date: str):
        super().__init__(f"No word stored for user {user_id} on {date}")
        self.user_id = user_id
        self.date = date


class PersistenceError(Exception):
    """Writing to the store failed."""


class ProviderError(Exception):
    """A single LLM provider call failed or returned an unusable payload."""

    def __init__(self, provider: str, message: str):
        super().__init__(f"{provider}: {message}")
        self.provider = provider


class NoProviderAvailable(Exception):
    """Every configured LLM provider was skipped or failed."""


class DuplicateWord(Exception):
    """The word bank already holds this word."""

    def __init__(self, word: str):
        super().__init__(f"Word already exists: {word}")
        self.word = word
