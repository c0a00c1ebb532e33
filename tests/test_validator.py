"""Tests for dictionary-backed word validation."""

import httpx
import pytest

from wordduel.dictionary import (
    DictionaryValidator,
    StaticValidator,
    Verdict,
    create_validator,
)


def mock_client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


def status_handler(status: int):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status, json=[])
    return handler


# ============================================================================
# DictionaryValidator
# ============================================================================

class TestDictionaryValidator:
    """Tests for the HTTP-backed validator (fail-open on transport errors)."""

    @pytest.mark.asyncio
    async def test_found_word_accepted(self):
        """A 200 response accepts the word."""
        validator = DictionaryValidator(client=mock_client(status_handler(200)))
        assert await validator.validate("apple") == Verdict.ACCEPTED

    @pytest.mark.asyncio
    async def test_not_found_rejected(self):
        """A 404 response rejects the word."""
        validator = DictionaryValidator(client=mock_client(status_handler(404)))
        assert await validator.validate("xyzzytest") == Verdict.REJECTED

    @pytest.mark.asyncio
    async def test_server_error_rejected(self):
        """Any non-200 status rejects the word."""
        validator = DictionaryValidator(client=mock_client(status_handler(500)))
        assert await validator.validate("apple") == Verdict.REJECTED

    @pytest.mark.asyncio
    async def test_connection_failure_accepted(self):
        """An unreachable dictionary accepts the word."""
        def handler(request):
            raise httpx.ConnectError("unreachable", request=request)

        validator = DictionaryValidator(client=mock_client(handler))
        assert await validator.validate("xyzzytest") == Verdict.ACCEPTED

    @pytest.mark.asyncio
    async def test_timeout_accepted(self):
        """A timed-out lookup accepts the word."""
        def handler(request):
            raise httpx.ReadTimeout("too slow", request=request)

        validator = DictionaryValidator(client=mock_client(handler))
        assert await validator.validate("xyzzytest") == Verdict.ACCEPTED

    @pytest.mark.asyncio
    async def test_requests_word_under_base_url(self):
        """The word is appended to the base URL without a doubled slash."""
        seen = []

        def handler(request):
            seen.append(str(request.url))
            return httpx.Response(200)

        validator = DictionaryValidator(
            base_url="https://dict.example/entries/en/", client=mock_client(handler)
        )
        await validator.validate("pear")
        assert seen == ["https://dict.example/entries/en/pear"]

    def test_base_url_from_environment(self, monkeypatch):
        """DICTIONARY_API_URL sets the default base URL."""
        monkeypatch.setenv("DICTIONARY_API_URL", "https://env.example/en")
        assert DictionaryValidator().base_url == "https://env.example/en"

    @pytest.mark.asyncio
    async def test_validate_many(self):
        """A batch returns one verdict per word."""
        def handler(request):
            word = request.url.path.rsplit("/", 1)[-1]
            return httpx.Response(404 if word == "qzx" else 200)

        validator = DictionaryValidator(client=mock_client(handler))
        verdicts = await validator.validate_many(["apple", "qzx"])
        assert verdicts == {"apple": Verdict.ACCEPTED, "qzx": Verdict.REJECTED}


# ============================================================================
# StaticValidator and factory
# ============================================================================

class TestStaticValidator:
    @pytest.mark.asyncio
    async def test_rejects_listed_words(self):
        """Only configured words are rejected, and every lookup is recorded."""
        validator = StaticValidator(rejected={"Qzx"})
        assert await validator.validate("qzx") == Verdict.REJECTED
        assert await validator.validate("apple") == Verdict.ACCEPTED
        assert validator.calls == ["qzx", "apple"]

    @pytest.mark.asyncio
    async def test_failure_mode_accepts(self):
        """Simulated failures still accept."""
        validator = StaticValidator(rejected={"qzx"}, fail=True)
        assert await validator.validate("qzx") == Verdict.ACCEPTED


class TestCreateValidator:
    def test_static(self):
        """The factory builds a static validator."""
        validator = create_validator("static", rejected={"qzx"})
        assert isinstance(validator, StaticValidator)

    def test_dictionary(self):
        """The factory passes options to the dictionary validator."""
        validator = create_validator("dictionary", base_url="https://dict.example", timeout=1.0)
        assert isinstance(validator, DictionaryValidator)
        assert validator.timeout == 1.0

    def test_unknown_kind(self):
        """Unknown validator kinds raise ValueError."""
        with pytest.raises(ValueError, match="Unknown validator"):
            create_validator("thesaurus")
