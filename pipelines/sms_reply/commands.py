"""
Reply command registry and classifier.

Maps an inbound operator SMS ("4 TUE 2PM", "SNOOZE 3H", "STOP", "NOTE: gate
code 1234") to the command it invokes and extracts the free-text argument
that follows the command prefix.

Commands are checked in ascending priority; ties keep registration order.
The lowest-priority command is a catch-all that files any longer free text
as a note.
"""

from typing import Callable, Dict, List, Optional

from core.contracts.sms_reply import CommandKind, CommandMatch
from core.logger import get_logger

logger = get_logger(__name__)

# (body_upper, body_original) -> bool
MatchFn = Callable[[str, str], bool]
# body_original -> argument
ExtractFn = Callable[[str], str]


# =============================================================================
# KEYWORDS
# =============================================================================

STOP_KEYWORDS = ("STOP", "UNSUBSCRIBE", "CANCEL", "END", "QUIT")
START_KEYWORDS = ("START", "UNSTOP", "SUBSCRIBE")
CONFIRM_KEYWORDS = ("OK", "Y", "YES", "CONFIRM")
CALL_KEYWORDS = ("CALL", "PHONE", "NUMBER")
COMPLETE_KEYWORDS = ("COMPLETE", "DONE", "FINISHED")
HELP_KEYWORDS = ("HELP", "?")

# Status codes: code -> (priority, lead status, confirmation label)
STATUS_CODES: Dict[str, tuple] = {
    "1": (11, "callback_requested", "CONTACTED"),
    "2": (12, "voicemail_left", "VOICEMAIL"),
    "4": (14, "converted", "SCHEDULED"),
    "5": (15, "lost", "LOST"),
}

# Word statuses: name -> (priority, keywords, lead status, confirmation label)
WORD_STATUSES: Dict[str, tuple] = {
    "word-contacted": (50, ("CONTACTED", "CALLED"), "contacted", "CONTACTED"),
    "word-scheduled": (51, ("SCHEDULED", "BOOKED"), "converted", "SCHEDULED"),
    "word-closed": (52, ("CLOSED", "LOST"), "lost", "CLOSED"),
}

# Short replies the free-text catch-all must not swallow
_NOT_FREE_TEXT = frozenset(CONFIRM_KEYWORDS + CALL_KEYWORDS)
FREE_TEXT_MIN_LENGTH = 4


# =============================================================================
# COMMAND DEFINITION
# =============================================================================

class Command:
    """A single reply command: how to recognize it and what to extract."""

    __slots__ = ("name", "kind", "priority", "match", "extract", "code")

    def __init__(
        self,
        name: str,
        kind: CommandKind,
        priority: int,
        match: MatchFn,
        extract: Optional[ExtractFn] = None,
        code: Optional[str] = None,
    ) -> None:
        self.name = name
        self.kind = kind
        self.priority = priority
        self.match = match
        self.extract = extract
        self.code = code

    def to_match(self, body: str) -> CommandMatch:
        """Build the classification result for a matched body."""
        argument = self.extract(body).strip() if self.extract else ""
        return CommandMatch(
            name=self.name,
            kind=self.kind,
            priority=self.priority,
            argument=argument,
            code=self.code,
        )

    def __repr__(self) -> str:
        return f"Command(name={self.name!r}, priority={self.priority})"


def _after_prefix(length: int) -> ExtractFn:
    return lambda body: body[length:]


def _note_text(body: str) -> str:
    """Text after "NOTE:" or "NOTE "."""
    if body[:5].upper() == "NOTE:":
        return body[body.index(":") + 1:]
    return body[5:]


# =============================================================================
# REGISTRY
# =============================================================================

class CommandRegistry:
    """
    Registry of reply commands, checked in priority order.

    Usage:
        registry = build_default_registry()
        match = registry.classify("BOOK tue 2pm")
        # {"name": "book-prefix", "kind": "booking", "argument": "tue 2pm", ...}
    """

    def __init__(self) -> None:
        """Initialize an empty command registry."""
        self._commands: Dict[str, Command] = {}

    def register(self, command: Command) -> None:
        """
        Register a command.

        Raises:
            ValueError: If a command with this name already exists.
        """
        if command.name in self._commands:
            raise ValueError(f"Command '{command.name}' is already registered")
        self._commands[command.name] = command

    def get(self, name: str) -> Optional[Command]:
        """Retrieve a registered command by name, or None."""
        return self._commands.get(name)

    def unregister(self, name: str) -> bool:
        """
        Remove a command from the registry.

        Returns:
            True if the command was removed, False if it didn't exist.
        """
        if name in self._commands:
            del self._commands[name]
            return True
        return False

    def ordered(self) -> List[Command]:
        """Registered commands in evaluation order."""
        # sorted() is stable, so equal priorities keep registration order
        return sorted(self._commands.values(), key=lambda c: c.priority)

    def list_commands(self) -> List[str]:
        """Registered command names in evaluation order."""
        return [command.name for command in self.ordered()]

    def find(self, body: Optional[str]) -> Optional[Command]:
        """Return the first command matching the body, or None."""
        original = (body or "").strip()
        upper = original.upper()
        for command in self.ordered():
            if command.match(upper, original):
                return command
        return None

    def classify(self, body: Optional[str]) -> CommandMatch:
        """
        Classify an inbound reply.

        Args:
            body: Raw SMS body (original case).

        Returns:
            CommandMatch for the first matching command, or an "unknown"
            match when nothing applies.
        """
        original = (body or "").strip()
        command = self.find(original)

        if command is None:
            logger.debug(f"No command matched reply: {original!r}")
            return CommandMatch(
                name="unknown",
                kind="unknown",
                priority=0,
                argument=original,
                code=None,
            )

        logger.debug(f"Reply {original!r} matched command '{command.name}'")
        return command.to_match(original)

    def __len__(self) -> int:
        return len(self._commands)


def build_default_registry() -> CommandRegistry:
    """Build the registry of all operator reply commands."""
    registry = CommandRegistry()

    registry.register(Command(
        "stop", "subscription", 1, lambda upper, _: upper in STOP_KEYWORDS,
    ))
    registry.register(Command(
        "start", "subscription", 2, lambda upper, _: upper in START_KEYWORDS,
    ))

    for code, (priority, _status, _label) in STATUS_CODES.items():
        registry.register(Command(
            f"code-{code}", "lead_status", priority,
            lambda upper, _, code=code: upper == code,
            code=code,
        ))

    registry.register(Command(
        "code-3-note", "note", 13,
        lambda _, original: original.startswith(("3 ", "3:")),
        extract=_after_prefix(2),
        code="3",
    ))
    registry.register(Command(
        "code-4-booking", "booking", 14,
        lambda upper, _: upper.startswith("4 "),
        extract=_after_prefix(2),
        code="4",
    ))
    registry.register(Command(
        "snooze", "snooze", 20,
        lambda upper, _: upper.startswith("SNOOZE"),
        extract=_after_prefix(len("SNOOZE")),
    ))
    registry.register(Command(
        "book-prefix", "booking", 25,
        lambda upper, _: upper.startswith("BOOK "),
        extract=_after_prefix(len("BOOK ")),
    ))
    registry.register(Command(
        "confirm-booking", "confirm", 30, lambda upper, _: upper in CONFIRM_KEYWORDS,
    ))
    registry.register(Command(
        "call-info", "job_action", 40, lambda upper, _: upper in CALL_KEYWORDS,
    ))
    registry.register(Command(
        "complete-job", "job_action", 45, lambda upper, _: upper in COMPLETE_KEYWORDS,
    ))

    for name, (priority, keywords, _status, _label) in WORD_STATUSES.items():
        registry.register(Command(
            name, "lead_status", priority,
            lambda upper, _, keywords=keywords: upper in keywords,
        ))

    registry.register(Command(
        "note-prefix", "note", 60,
        lambda upper, _: upper.startswith(("NOTE:", "NOTE ")),
        extract=_note_text,
    ))
    registry.register(Command(
        "help", "help", 70, lambda upper, _: upper in HELP_KEYWORDS,
    ))
    registry.register(Command(
        "free-text-note", "note", 100,
        lambda upper, _: len(upper) >= FREE_TEXT_MIN_LENGTH and upper not in _NOT_FREE_TEXT,
        extract=lambda body: body,
    ))

    return registry


# Shared registry instance
command_registry = build_default_registry()


def classify_reply(body: Optional[str], registry: Optional[CommandRegistry] = None) -> CommandMatch:
    """Classify a reply with the given registry (default: command_registry)."""
    if registry is None:
        registry = command_registry
    return registry.classify(body)
