"""Tests for the reply command registry and classifier.

These tests validate:
- Each default command's match and argument extraction
- Priority ordering, including the free-text catch-all
- Registry semantics (duplicates, lookup, removal, tie ordering)
"""

import pytest

from pipelines.sms_reply.commands import (
    Command,
    CommandRegistry,
    build_default_registry,
    classify_reply,
    command_registry,
)


# =============================================================================
# DEFAULT COMMANDS
# =============================================================================

class TestSubscriptionCommands:
    """Tests for STOP / START keywords."""

    @pytest.mark.parametrize("body", ["STOP", "stop", "Unsubscribe", "CANCEL", "END", "QUIT"])
    def test_stop(self, body):
        match = classify_reply(body)

        assert match["name"] == "stop"
        assert match["kind"] == "subscription"

    @pytest.mark.parametrize("body", ["START", "unstop", "SUBSCRIBE"])
    def test_start(self, body):
        assert classify_reply(body)["name"] == "start"

    def test_stop_inside_sentence_is_not_opt_out(self):
        """Only the bare keyword opts out."""
        assert classify_reply("please stop by at 5")["name"] == "free-text-note"


class TestStatusCodes:
    """Tests for numeric reply codes."""

    @pytest.mark.parametrize("body,code,priority", [
        ("1", "1", 11),
        ("2", "2", 12),
        ("4", "4", 14),
        ("5", "5", 15),
    ])
    def test_codes(self, body, code, priority):
        match = classify_reply(body)

        assert match["name"] == f"code-{code}"
        assert match["kind"] == "lead_status"
        assert match["code"] == code
        assert match["priority"] == priority

    def test_code_with_surrounding_whitespace(self):
        assert classify_reply("  2 \n")["name"] == "code-2"

    def test_code_3_with_note(self):
        """3 followed by text files a note with that text."""
        match = classify_reply("3 Customer prefers mornings")

        assert match["name"] == "code-3-note"
        assert match["kind"] == "note"
        assert match["argument"] == "Customer prefers mornings"
        assert match["code"] == "3"

    def test_code_3_colon(self):
        assert classify_reply("3: gate code 1234")["argument"] == "gate code 1234"

    def test_code_3_colon_without_text(self):
        match = classify_reply("3:")

        assert match["name"] == "code-3-note"
        assert match["argument"] == ""

    def test_code_4_with_time_is_booking(self):
        match = classify_reply("4 TUE 2PM")

        assert match["name"] == "code-4-booking"
        assert match["kind"] == "booking"
        assert match["argument"] == "TUE 2PM"
        assert match["code"] == "4"

    def test_bare_4_is_status(self):
        """4 alone marks the lead scheduled without a time."""
        assert classify_reply("4")["kind"] == "lead_status"

    def test_unlisted_code_is_unknown(self):
        assert classify_reply("7")["kind"] == "unknown"


class TestPrefixCommands:
    """Tests for SNOOZE, BOOK, and NOTE prefixes."""

    def test_snooze_argument(self):
        match = classify_reply("SNOOZE 3H")

        assert match["name"] == "snooze"
        assert match["argument"] == "3H"

    def test_snooze_preserves_case(self):
        assert classify_reply("snooze tomorrow pm")["argument"] == "tomorrow pm"

    def test_snooze_without_argument(self):
        match = classify_reply("SNOOZE")

        assert match["kind"] == "snooze"
        assert match["argument"] == ""

    def test_book_prefix(self):
        match = classify_reply("BOOK tue 2pm")

        assert match["name"] == "book-prefix"
        assert match["kind"] == "booking"
        assert match["argument"] == "tue 2pm"

    @pytest.mark.parametrize("body,argument", [
        ("NOTE: Gate code 1234", "Gate code 1234"),
        ("note:dog in yard", "dog in yard"),
        ("Note call after 5", "call after 5"),
    ])
    def test_note_prefix(self, body, argument):
        match = classify_reply(body)

        assert match["name"] == "note-prefix"
        assert match["argument"] == argument


class TestKeywordCommands:
    """Tests for single-word commands."""

    @pytest.mark.parametrize("body,name", [
        ("OK", "confirm-booking"),
        ("y", "confirm-booking"),
        ("Yes", "confirm-booking"),
        ("CALL", "call-info"),
        ("number", "call-info"),
        ("DONE", "complete-job"),
        ("Finished", "complete-job"),
        ("contacted", "word-contacted"),
        ("BOOKED", "word-scheduled"),
        ("lost", "word-closed"),
        ("HELP", "help"),
        ("?", "help"),
    ])
    def test_keyword(self, body, name):
        assert classify_reply(body)["name"] == name


class TestFallback:
    """Tests for the free-text catch-all and unknown replies."""

    def test_free_text_becomes_note(self):
        match = classify_reply("Customer wants a quote for the deck")

        assert match["name"] == "free-text-note"
        assert match["priority"] == 100
        assert match["argument"] == "Customer wants a quote for the deck"

    @pytest.mark.parametrize("body", ["hi", "k", "abc"])
    def test_short_text_is_unknown(self, body):
        match = classify_reply(body)

        assert match["name"] == "unknown"
        assert match["kind"] == "unknown"
        assert match["argument"] == body

    @pytest.mark.parametrize("body", ["", "   ", None])
    def test_empty_is_unknown(self, body):
        match = classify_reply(body)

        assert match["kind"] == "unknown"
        assert match["argument"] == ""


# =============================================================================
# REGISTRY
# =============================================================================

class TestCommandRegistry:
    """Tests for CommandRegistry semantics."""

    def test_duplicate_name_rejected(self):
        registry = CommandRegistry()
        registry.register(Command("ping", "help", 1, lambda upper, _: upper == "PING"))

        with pytest.raises(ValueError, match="already registered"):
            registry.register(Command("ping", "help", 2, lambda upper, _: False))

    def test_get_and_unregister(self):
        registry = build_default_registry()

        assert registry.get("help").priority == 70
        assert registry.unregister("help") is True
        assert registry.get("help") is None
        assert registry.unregister("help") is False

    def test_unregister_changes_classification(self):
        """Without the help command, HELP falls through to the catch-all."""
        registry = build_default_registry()
        registry.unregister("help")

        assert registry.classify("HELP")["name"] == "free-text-note"

    def test_list_commands_in_priority_order(self):
        names = command_registry.list_commands()

        assert names[0] == "stop"
        assert names[-1] == "free-text-note"
        assert names.index("snooze") < names.index("book-prefix") < names.index("note-prefix")

    def test_ties_keep_registration_order(self):
        registry = CommandRegistry()
        registry.register(Command("first", "help", 5, lambda upper, _: True))
        registry.register(Command("second", "help", 5, lambda upper, _: True))

        assert registry.classify("anything")["name"] == "first"

    def test_lower_priority_wins(self):
        registry = CommandRegistry()
        registry.register(Command("late", "note", 50, lambda upper, _: True))
        registry.register(Command("early", "help", 10, lambda upper, _: True))

        assert registry.classify("x")["name"] == "early"

    def test_empty_registry_is_used_not_replaced(self):
        """An empty registry classifies everything as unknown."""
        empty = CommandRegistry()

        assert len(empty) == 0
        assert classify_reply("STOP", registry=empty)["kind"] == "unknown"

    def test_default_registry_size(self):
        assert len(build_default_registry()) == len(command_registry)
