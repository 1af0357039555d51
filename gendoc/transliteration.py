"""Transliteration of extended Latin letters used by slug generation."""

from __future__ import annotations

# Latin-1 Supplement, Latin Extended-A and Latin Extended-B letters folded to
# lowercase ASCII. Both cases are listed so lookup can happen before lowercasing.
TRANSLITERATION: dict[str, str] = {
    "À": "a", "à": "a", "Á": "a", "á": "a", "Â": "a", "â": "a",
    "Ã": "a", "ã": "a", "Ä": "a", "ä": "a", "Å": "a", "å": "a",
    "Æ": "ae", "æ": "ae", "Ç": "c", "ç": "c", "È": "e", "è": "e",
    "É": "e", "é": "e", "Ê": "e", "ê": "e", "Ë": "e", "ë": "e",
    "Ì": "i", "ì": "i", "Í": "i", "í": "i", "Î": "i", "î": "i",
    "Ï": "i", "ï": "i", "Ð": "d", "ð": "d", "Ñ": "n", "ñ": "n",
    "Ò": "o", "ò": "o", "Ó": "o", "ó": "o", "Ô": "o", "ô": "o",
    "Õ": "o", "õ": "o", "Ö": "o", "ö": "o", "Ø": "o", "ø": "o",
    "Ù": "u", "ù": "u", "Ú": "u", "ú": "u", "Û": "u", "û": "u",
    "Ü": "u", "ü": "u", "Ý": "y", "ý": "y", "Þ": "p", "þ": "p",
    "Ā": "a", "ā": "a", "Ă": "a", "ă": "a", "Ą": "a", "ą": "a",
    "Ć": "c", "ć": "c", "Ĉ": "c", "ĉ": "c", "Ċ": "c", "ċ": "c",
    "Č": "c", "č": "c", "Ď": "d", "ď": "d", "Đ": "d", "đ": "d",
    "Ē": "e", "ē": "e", "Ĕ": "e", "ĕ": "e", "Ė": "e", "ė": "e",
    "Ę": "e", "ę": "e", "Ě": "e", "ě": "e", "Ĝ": "g", "ĝ": "g",
    "Ğ": "g", "ğ": "g", "Ġ": "g", "ġ": "g", "Ģ": "g", "ģ": "g",
    "Ĥ": "h", "ĥ": "h", "Ħ": "h", "ħ": "h", "Ĩ": "i", "ĩ": "i",
    "Ī": "i", "ī": "i", "Ĭ": "i", "ĭ": "i", "Į": "i", "į": "i",
    "İ": "i", "Ĳ": "ij", "ĳ": "ij", "Ĵ": "j", "ĵ": "j", "Ķ": "k",
    "ķ": "k", "Ĺ": "l", "ĺ": "l", "Ļ": "l", "ļ": "l", "Ľ": "l",
    "ľ": "l", "Ŀ": "l", "ŀ": "l", "Ł": "l", "ł": "l", "Ń": "n",
    "ń": "n", "Ņ": "n", "ņ": "n", "Ň": "n", "ň": "n", "Ŋ": "n",
    "ŋ": "n", "Ō": "o", "ō": "o", "Ŏ": "o", "ŏ": "o", "Ő": "o",
    "ő": "o", "Œ": "oe", "œ": "oe", "Ŕ": "r", "ŕ": "r", "Ŗ": "r",
    "ŗ": "r", "Ř": "r", "ř": "r", "Ś": "s", "ś": "s", "Ŝ": "s",
    "ŝ": "s", "Ş": "s", "ş": "s", "Š": "s", "š": "s", "Ţ": "t",
    "ţ": "t", "Ť": "t", "ť": "t", "Ŧ": "t", "ŧ": "t", "Ũ": "u",
    "ũ": "u", "Ū": "u", "ū": "u", "Ŭ": "u", "ŭ": "u", "Ů": "u",
    "ů": "u", "Ű": "u", "ű": "u", "Ų": "u", "ų": "u", "Ŵ": "w",
    "ŵ": "w", "Ŷ": "y", "ŷ": "y", "Ÿ": "y", "ÿ": "y", "Ź": "z",
    "ź": "z", "Ż": "z", "ż": "z", "Ž": "z", "ž": "z", "Ɓ": "b",
    "ɓ": "b", "Ƃ": "b", "ƃ": "b", "Ƅ": "b", "ƅ": "b", "Ɔ": "c",
    "ɔ": "c", "Ƈ": "c", "ƈ": "c", "Ɖ": "d", "ɖ": "d", "Ɗ": "d",
    "ɗ": "d", "Ƌ": "d", "ƌ": "d", "Ǝ": "e", "ǝ": "e", "Ə": "e",
    "ə": "e", "Ɛ": "e", "ɛ": "e", "Ƒ": "f", "ƒ": "f", "Ɠ": "g",
    "ɠ": "g", "Ɣ": "y", "ɣ": "y", "Ɩ": "l", "ɩ": "l", "Ɨ": "i",
    "ɨ": "i", "Ƙ": "k", "ƙ": "k", "Ɯ": "w", "ɯ": "w", "Ɲ": "n",
    "ɲ": "n", "Ɵ": "o", "ɵ": "o", "Ơ": "o", "ơ": "o", "Ƣ": "oj",
    "ƣ": "oj", "Ƥ": "p", "ƥ": "p", "Ʀ": "r", "ʀ": "r", "Ƨ": "s",
    "ƨ": "s", "Ʃ": "s", "ʃ": "s", "Ƭ": "t", "ƭ": "t", "Ʈ": "t",
    "ʈ": "t", "Ư": "u", "ư": "u", "Ʊ": "u", "ʊ": "u", "Ʋ": "u",
    "ʋ": "u", "Ƴ": "y", "ƴ": "y", "Ƶ": "z", "ƶ": "z", "Ʒ": "z",
    "ʒ": "z", "Ƹ": "z", "ƹ": "z", "Ƽ": "z", "ƽ": "z", "Ǆ": "dz",
    "ǆ": "dz", "ǅ": "dz", "Ǉ": "lj", "ǉ": "lj", "ǈ": "lj", "Ǌ": "nj",
    "ǌ": "nj", "ǋ": "nj", "Ǎ": "a", "ǎ": "a", "Ǐ": "i", "ǐ": "i",
    "Ǒ": "o", "ǒ": "o", "Ǔ": "u", "ǔ": "u", "Ǖ": "u", "ǖ": "u",
    "Ǘ": "u", "ǘ": "u", "Ǚ": "u", "ǚ": "u", "Ǜ": "u", "ǜ": "u",
    "Ǟ": "a", "ǟ": "a", "Ǡ": "a", "ǡ": "a", "Ǣ": "ae", "ǣ": "ae",
    "Ǥ": "g", "ǥ": "g", "Ǧ": "g", "ǧ": "g", "Ǩ": "k", "ǩ": "k",
    "Ǫ": "o", "ǫ": "o", "Ǭ": "o", "ǭ": "o", "Ǯ": "z", "ǯ": "z",
    "Ǳ": "dz", "ǳ": "dz", "ǲ": "dz", "Ǵ": "g", "ǵ": "g", "Ƕ": "hj",
    "ƕ": "hj", "Ƿ": "p", "ƿ": "p", "Ǹ": "n", "ǹ": "n", "Ǻ": "a",
    "ǻ": "a", "Ǽ": "ae", "ǽ": "ae", "Ǿ": "o", "ǿ": "o", "Ȁ": "a",
    "ȁ": "a", "Ȃ": "a", "ȃ": "a", "Ȅ": "e", "ȅ": "e", "Ȇ": "e",
    "ȇ": "e", "Ȉ": "i", "ȉ": "i", "Ȋ": "i", "ȋ": "i", "Ȍ": "o",
    "ȍ": "o", "Ȏ": "o", "ȏ": "o", "Ȑ": "r", "ȑ": "r", "Ȓ": "r",
    "ȓ": "r", "Ȕ": "u", "ȕ": "u", "Ȗ": "u", "ȗ": "u", "Ș": "s",
    "ș": "s", "Ț": "t", "ț": "t", "Ȝ": "z", "ȝ": "z", "Ȟ": "h",
    "ȟ": "h", "Ƞ": "n", "ƞ": "n", "Ȣ": "o", "ȣ": "o", "Ȥ": "z",
    "ȥ": "z", "Ȧ": "a", "ȧ": "a", "Ȩ": "e", "ȩ": "e", "Ȫ": "o",
    "ȫ": "o", "Ȭ": "o", "ȭ": "o", "Ȯ": "o", "ȯ": "o", "Ȱ": "o",
    "ȱ": "o", "Ȳ": "y", "ȳ": "y", "Ⱥ": "a", "ⱥ": "a", "Ȼ": "c",
    "ȼ": "c", "Ƚ": "l", "ƚ": "l", "Ⱦ": "t", "ⱦ": "t", "Ƀ": "b",
    "ƀ": "b", "Ʉ": "u", "ʉ": "u", "Ɇ": "e", "ɇ": "e", "Ɉ": "j",
    "ɉ": "j", "Ɋ": "q", "ɋ": "q", "Ɍ": "r", "ɍ": "r", "Ɏ": "y",
    "ɏ": "y",
}
