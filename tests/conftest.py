from typing import Callable, Optional

from pytest import fixture

from keycalc.cli import press
from keycalc.editor import Editor


@fixture
def editor() -> Editor:
    editor = Editor()
    editor.init()
    return editor


@fixture
def keys(editor: Editor) -> Callable[[str], Optional[str]]:
    '''
    Type a string of keys into the editor, like on the command line.

    Returns whatever the last key returned; the result, for =.
    '''
    def type_keys(typed: str) -> Optional[str]:
        result = None
        for key in typed:
            result = press(editor, key)
        return result
    return type_keys
