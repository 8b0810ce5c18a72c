"""Example words for the phonetic symbols in a transcription."""

from ipa_master.models.word import Hint

SINGLE_SYMBOL_HINTS: dict[str, str] = {
    "æ": "c(a)t",
    "ə": "sof(a)",
    "a": "f(a)ther",
    "ʌ": "b(u)t",
    "ɪ": "b(i)t",
    "ʊ": "b(oo)k",
    "ɔ": "l(aw)",
    "ɛ": "b(e)d",
    "ɑ": "c(o)t",
    "i": "s(ee)",
    "u": "b(oo)t",
    "e": "b(a)te",
    "ɝ": "b(ir)d",
    "θ": "(th)ink",
    "ð": "(th)is",
    "ʃ": "(sh)e",
    "ʒ": "mea(s)ure",
    "ŋ": "si(ng)",
    "ɹ": "(r)ed",
    "l": "(l)ove",
    "w": "(w)e",
    "j": "(y)es",
    "h": "(h)ouse",
    "p": "(p)et",
    "b": "(b)et",
    "t": "(t)op",
    "d": "(d)og",
    "k": "(c)at",
    "g": "(g)o",
    "f": "(f)un",
    "v": "(v)ery",
    "s": "(s)it",
    "z": "(z)oo",
    "m": "(m)y",
    "n": "(n)o",
}

MULTI_SYMBOL_HINTS: dict[str, str] = {
    "tʃ": "(ch)eck",
    "dʒ": "(j)ump",
    "aj": "(i)ce",
    "aw": "(ou)t",
    "ej": "(a)te",
    "ow": "b(o)ne",
    "ɔj": "(oy)",
    "ɪə": "(ear)",
    "ɛə": "(air)",
    "ʊə": "(our)",
}

# Multi-character symbols are tried first.
_SYMBOLS = [*MULTI_SYMBOL_HINTS, *SINGLE_SYMBOL_HINTS]
_EXAMPLES = {**SINGLE_SYMBOL_HINTS, **MULTI_SYMBOL_HINTS}


def get_hints(transcription: str) -> list[Hint]:
    """Split a transcription into known symbols, in order of appearance.

    Unknown characters (stress marks, length marks) are skipped.
    """
    hints: list[Hint] = []
    i = 0
    while i < len(transcription):
        for symbol in _SYMBOLS:
            if transcription.startswith(symbol, i):
                hints.append(Hint(symbol=symbol, example=_EXAMPLES[symbol]))
                i += len(symbol)
                break
        else:
            i += 1
    return hints
