from __future__ import annotations

import re
from typing import Any

# matched against whole words of a name split on `-`, `_` and `.`
SENSITIVE_WORDS = (
    ('token',),
    ('auth',),
    ('authorization',),
    ('password',),
    ('passwd',),
    ('pwd',),
    ('passphrase',),
    ('secret',),
    ('credentials',),
    ('private', 'key'),
    ('api', 'key'),
    ('apikey',),
    ('webhook',),
    ('cookie',),
)

REDACTED = '[REDACTED]'

_WORD_SEP_RE = re.compile(r'[-_.]+')


def is_sensitive(name: str) -> bool:
    # `slack-webhook-url` and `API_TOKEN` count, `author` does not
    words = tuple(w for w in _WORD_SEP_RE.split(name.lower()) if w)
    for seq in SENSITIVE_WORDS:
        n = len(seq)
        if any(words[i:i + n] == seq for i in range(len(words) - n + 1)):
            return True
    return False


def redact(name: str, value: Any, *, max_len: int = 200) -> Any:
    """
    Return `value` safe for logging under the option/annotation `name`.
    """
    if is_sensitive(name) and value not in (None, ''):
        return REDACTED

    if isinstance(value, str) and len(value) > max_len:
        return value[:max_len] + '…[TRUNCATED]'

    return value
