"""Models package — re-export the corpus record types."""
from originality.models.fingerprint import PageFingerprint  # noqa: F401
from originality.models.corpus_entry import CorpusEntry  # noqa: F401
