#      _
#   __| |__ _ _ __  ___
#  / _` / _` | '_ \(_-<
#  \__,_\__,_| .__//__/
#            |_|
#
# daps: AWS Parameter Store CLI
# Copyright 2025 daps contributors
#

import logging
from typing import Iterable, List, Optional, Tuple

from prompt_toolkit.completion import Completion, Completer

from .constants import DEFAULT_PARAMETER_TYPE, PATH_DELIMITER, SHELL_COMMANDS, STATEFUL_VERBS
from .params import DapsParams
from .storage import join_path


def split_lookup(text):    # type: (str) -> Tuple[str, str]
    """Split partial input into the path to look up and the prefix of the child name."""
    pos = text.rfind(PATH_DELIMITER)
    if pos < 0:
        return PATH_DELIMITER, text
    lookup_path = text[:pos] if pos > 0 else PATH_DELIMITER
    return lookup_path, text[pos + 1:]


class CompletionEngine:
    """ Completion candidates for the whole input line. Read only. """

    def __init__(self, params, commands=SHELL_COMMANDS):    # type: (DapsParams, Iterable[str]) -> None
        self.params = params
        self.commands = list(commands)

    def stateful_candidate(self, text):    # type: (str) -> Optional[str]
        lowered = text.lower()
        verb = next((x for x in STATEFUL_VERBS if lowered.startswith(x)), None)
        if verb is None:
            return None
        selected = self.params.metadata.selected
        value = self.params.cache.get_value(selected) or ''
        if verb == 'set':
            return f'set {value}'
        return f'insert {selected}:{value}:{DEFAULT_PARAMETER_TYPE}'

    def path_candidates(self, text):    # type: (str) -> List[str]
        lookup_path, prefix = split_lookup(text)
        prefix = prefix.lower()
        return [join_path(lookup_path, x) for x in self.params.cache.children(lookup_path)
                if x.lower().startswith(prefix)]

    def command_candidates(self, text):    # type: (str) -> List[str]
        lowered = text.lower()
        return [x for x in self.commands if x.lower().startswith(lowered)]

    def get_candidates(self, text):    # type: (str) -> List[str]
        candidate = self.stateful_candidate(text)
        if candidate is not None:
            return [candidate]
        return self.path_candidates(text) + self.command_candidates(text)


class ParameterCompleter(Completer):
    def __init__(self, params):    # type: (DapsParams) -> None
        Completer.__init__(self)
        self.engine = CompletionEngine(params)

    def get_completions(self, document, complete_event):
        try:
            text = document.text_before_cursor
            for candidate in self.engine.get_candidates(text.strip()):
                yield Completion(candidate, start_position=-len(text))
        except Exception as e:
            logging.debug('Completion exception: %s', e)
