import itertools
import logging
import threading
from typing import Any, Dict, List, Mapping, Optional, Union

from ..schemas import InsertSentence, InsertUser, Sentence, User
from ..utils import normalize_sentence, truncate_for_log
from .sentenceindex import SentenceIndex, SentenceMatch

logger = logging.getLogger(__name__)

# Number of index keys written to the log when a lookup finds nothing.
DEBUG_KEY_DUMP_LIMIT = 5


class StorageService:
    """In-memory store for users and sentence simplifications.

    Nothing is persisted: the data lives as long as the instance. One lock
    guards every read and write, so concurrent inserts of the same sentence
    still produce a single record.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._users: Dict[int, User] = {}
        self._sentences: Dict[int, Sentence] = {}
        self._index = SentenceIndex()
        self._user_ids = itertools.count(1)
        self._sentence_ids = itertools.count(1)

    def close(self) -> None:
        """Drop every stored record. Ids are not reused afterwards."""
        with self._lock:
            self._users.clear()
            self._sentences.clear()
            self._index.clear()

    # ---------- users ----------
    def get_user(self, user_id: int) -> Optional[User]:
        with self._lock:
            return self._users.get(user_id)

    def get_user_by_username(self, username: str) -> Optional[User]:
        with self._lock:
            return next((u for u in self._users.values() if u.username == username), None)

    def create_user(self, data: Union[InsertUser, Mapping[str, Any]]) -> User:
        if not isinstance(data, InsertUser):
            data = InsertUser.model_validate(data)
        with self._lock:
            user_id = next(self._user_ids)
            user = User.model_validate({**data.model_dump(), "id": user_id})
            self._users[user_id] = user
        return user

    def list_users(self) -> List[User]:
        with self._lock:
            return list(self._users.values())

    def get_or_create_user(self, username: str) -> User:
        with self._lock:
            existing = self.get_user_by_username(username)
            if existing:
                return existing
            return self.create_user(InsertUser(username=username))

    # ---------- sentences ----------
    def insert_sentence(self, data: Union[InsertSentence, Mapping[str, Any]]) -> Sentence:
        """Store a sentence unless an equivalent one exists.

        Sentences are equivalent when their normalized ``complex_sentence``
        is identical; the earlier record is returned in that case.
        """
        if not isinstance(data, InsertSentence):
            data = InsertSentence.model_validate(data)
        key = normalize_sentence(data.complex_sentence)

        with self._lock:
            existing = self._index.get_full(key)
            if existing is not None:
                logger.debug("Sentence already stored with ID %s", existing.id)
                return existing

            sentence_id = next(self._sentence_ids)
            sentence = Sentence.model_validate({**data.model_dump(), "id": sentence_id})
            self._sentences[sentence_id] = sentence
            self._index.add(key, sentence)

        logger.info("Added sentence with ID %s: %s", sentence_id, truncate_for_log(sentence.complex_sentence))
        logger.debug("Normalized key: %s", truncate_for_log(key))
        return sentence

    def get_all_sentences(self) -> List[Sentence]:
        with self._lock:
            return list(self._sentences.values())

    def get_simplified_sentence(self, complex_sentence: str, level: Optional[str] = None) -> Optional[Sentence]:
        match = self.find_sentence_match(complex_sentence, level)
        return match.sentence if match else None

    def find_sentence_match(self, complex_sentence: str, level: Optional[str] = None) -> Optional[SentenceMatch]:
        """
        Look up the stored sentence for ``complex_sentence``.

        ``level`` is logged but does not restrict the candidates.
        """
        logger.debug("Looking for sentence (level=%s): %s", level, truncate_for_log(complex_sentence))
        key = normalize_sentence(complex_sentence)
        logger.debug("Normalized input: %s", truncate_for_log(key))

        with self._lock:
            match = self._index.lookup(key)
            if match is None:
                sample = self._index.keys()[:DEBUG_KEY_DUMP_LIMIT]

        if match is None:
            logger.info("No match found for sentence")
            for i, candidate in enumerate(sample):
                logger.debug("Key %d: %s", i, truncate_for_log(candidate))
            return None

        logger.info(
            "Found sentence match with ID %s using %s key: %s",
            match.sentence.id,
            match.tier.value,
            truncate_for_log(match.key),
        )
        return match
