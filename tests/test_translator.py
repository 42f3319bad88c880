"""Tests for the translation service."""

import asyncio
import re

import pytest

from shell_ai.errors import BackendUnavailable, InvalidResponse, ValidationFailure
from shell_ai.llm.manager import LLMManager
from shell_ai.models import ERROR_SENTINEL, Mode
from shell_ai.translator import TranslationService, normalize_output

from conftest import FakeProvider


def _service(make_manager, replies=None, error=None, **kwargs):
    provider = FakeProvider(replies=replies, error=error)
    return TranslationService(make_manager(provider), **kwargs), provider


class TestGenerate:
    """Natural language to command."""

    def test_plain_command(self, make_manager):
        service, provider = _service(make_manager, ["ls -la"])
        result = asyncio.run(service.translate("list all files with details"))

        assert result.text == "ls -la"
        assert result.dangerous is False
        assert result.mode == Mode.GENERATE

    def test_single_request_with_defaults(self, make_manager):
        service, provider = _service(make_manager, ["pwd"])
        asyncio.run(service.translate("where am I"))

        assert len(provider.calls) == 1
        call = provider.calls[0]
        assert call["messages"] == [{"role": "user", "content": "where am I"}]
        assert "WARNING: " in call["system_prompt"]
        assert call["max_tokens"] == 200
        assert call["temperature"] == 0.1

    def test_delete_pdf_files_is_flagged(self, make_manager):
        service, _ = _service(make_manager, ["WARNING: find . -name '*.pdf' -delete"])
        result = asyncio.run(service.translate("delete all pdf files"))

        assert re.match(r"^WARNING: .*pdf.*", result.text, re.IGNORECASE)
        assert result.dangerous is True

    def test_non_destructive_not_flagged(self, make_manager):
        service, _ = _service(make_manager, ["du -sh ."])
        result = asyncio.run(service.translate("how big is this folder"))

        assert not result.text.startswith("WARNING: ")
        assert result.dangerous is False

    def test_marker_case_normalized(self, make_manager):
        service, _ = _service(make_manager, ["warning:   pkill firefox"])
        result = asyncio.run(service.translate("kill firefox"))

        assert result.text == "WARNING: pkill firefox"
        assert result.dangerous is True

    def test_marker_inside_code_fence(self, make_manager):
        service, _ = _service(make_manager, ["```bash\nWARNING: rm -rf build\n```"])
        result = asyncio.run(service.translate("remove the build dir"))

        assert result.text == "WARNING: rm -rf build"

    def test_empty_reply_becomes_sentinel(self, make_manager):
        service, _ = _service(make_manager, ["   \n"])
        result = asyncio.run(service.translate("do something"))

        assert result.text == ERROR_SENTINEL
        assert result.dangerous is False
        assert result.is_error

    def test_comment_reply_kept(self, make_manager):
        service, _ = _service(make_manager, ["# Cannot make coffee from a shell"])
        result = asyncio.run(service.translate("make me coffee"))

        assert result.text == "# Cannot make coffee from a shell"
        assert result.is_error
        assert result.dangerous is False

    def test_config_overrides(self, make_manager):
        service, provider = _service(make_manager, ["ls"], max_tokens=64, temperature=0.0)
        asyncio.run(service.translate("list"))

        assert provider.calls[0]["max_tokens"] == 64
        assert provider.calls[0]["temperature"] == 0.0


class TestExplain:
    """Command to natural language."""

    def test_destructive_command_flagged(self, make_manager):
        reply = "DANGER: Recursively and forcibly deletes /tmp/test. It never asks for confirmation."
        service, provider = _service(make_manager, [reply])
        result = asyncio.run(service.translate("rm -rf /tmp/test", Mode.EXPLAIN))

        assert result.text.startswith("DANGER: ")
        assert result.dangerous is True
        sentences = [s for s in re.split(r"[.!?](?:\s|$)", result.text) if s.strip()]
        assert len(sentences) <= 2
        assert "DANGER: " in provider.calls[0]["system_prompt"]

    def test_mode_accepts_string(self, make_manager):
        service, _ = _service(make_manager, ["Lists files, -l for long format."])
        result = asyncio.run(service.translate("ls -l", "explain"))

        assert result.mode == Mode.EXPLAIN
        assert result.dangerous is False

    def test_explanation_keeps_backticks(self, make_manager):
        service, _ = _service(make_manager, ["Prints `HOME`."])
        result = asyncio.run(service.translate("echo $HOME", Mode.EXPLAIN))

        assert result.text == "Prints `HOME`."

    def test_generate_marker_not_recognized_in_explain(self, make_manager):
        service, _ = _service(make_manager, ["WARNING: prints text"], local_denylist=False)
        result = asyncio.run(service.translate("echo hi", Mode.EXPLAIN))

        assert result.dangerous is False


class TestValidation:
    """Empty prompts never reach the backend."""

    @pytest.mark.parametrize("prompt", ["", "   ", None])
    def test_empty_prompt_rejected(self, make_manager, prompt):
        service, provider = _service(make_manager, ["ls"])
        with pytest.raises(ValidationFailure):
            asyncio.run(service.translate(prompt))
        assert provider.calls == []


class TestBackendErrors:
    """Backend failures propagate as typed errors."""

    def test_backend_unavailable(self, make_manager):
        service, _ = _service(make_manager, error=BackendUnavailable("connection refused"))
        with pytest.raises(BackendUnavailable):
            asyncio.run(service.translate("list files"))

    def test_invalid_response(self, make_manager):
        service, _ = _service(make_manager, error=InvalidResponse("no choices"))
        with pytest.raises(InvalidResponse):
            asyncio.run(service.translate("list files"))

    def test_uninitialized_manager(self):
        service = TranslationService(LLMManager(FakeProvider(["ls"])))
        with pytest.raises(BackendUnavailable):
            asyncio.run(service.translate("list files"))


class TestLocalDenylist:
    """Deterministic check adds a missing marker."""

    def test_adds_missing_generate_marker(self, make_manager):
        service, _ = _service(make_manager, ["rm -rf /tmp/x"])
        result = asyncio.run(service.translate("clean tmp"))

        assert result.text == "WARNING: rm -rf /tmp/x"
        assert result.dangerous is True

    def test_adds_missing_explain_marker(self, make_manager):
        service, _ = _service(make_manager, ["Deletes the test directory."])
        result = asyncio.run(service.translate("rm -rf /tmp/test", Mode.EXPLAIN))

        assert result.text == "DANGER: Deletes the test directory."

    def test_does_not_double_mark(self, make_manager):
        service, _ = _service(make_manager, ["WARNING: rm -rf /tmp/x"])
        result = asyncio.run(service.translate("clean tmp"))

        assert result.text == "WARNING: rm -rf /tmp/x"

    @pytest.mark.parametrize("prompt,reply,mode", [
        ("search syslog for shutdowns", "grep -i shutdown /var/log/syslog", Mode.GENERATE),
        ("find files with kill in the name", "find . -name '*kill*'", Mode.GENERATE),
        ("when did the machine last reboot", "last reboot", Mode.GENERATE),
        ("man kill", "Opens the manual page for the kill command.", Mode.EXPLAIN),
    ])
    def test_mentions_are_not_flagged(self, make_manager, prompt, reply, mode):
        service, _ = _service(make_manager, [reply])
        result = asyncio.run(service.translate(prompt, mode))

        assert result.text == reply
        assert result.dangerous is False

    def test_disabled(self, make_manager):
        service, _ = _service(make_manager, ["rm -rf /tmp/x"], local_denylist=False)
        result = asyncio.run(service.translate("clean tmp"))

        assert result.text == "rm -rf /tmp/x"
        assert result.dangerous is False


class TestNormalizeOutput:
    """Output cleanup."""

    @pytest.mark.parametrize("raw,expected", [
        ("`ls -la`", "ls -la"),
        ("$ ls -la", "ls -la"),
        ("```\nls -la\n```", "ls -la"),
        ("```ls -la```", "ls -la"),
        ("  git status \n", "git status"),
        ("", ""),
        (None, ""),
        ("WARNING:", ""),
    ])
    def test_generate(self, raw, expected):
        assert normalize_output(raw, Mode.GENERATE) == expected

    def test_explain_only_trims(self):
        assert normalize_output("  $ is the prompt.  ", Mode.EXPLAIN) == "$ is the prompt."

    def test_explain_marker_spacing(self):
        assert normalize_output("danger:Deletes everything.", Mode.EXPLAIN) == "DANGER: Deletes everything."
