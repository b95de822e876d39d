import hashlib
import re
import unicodedata

_SEPARATORS = re.compile(r"[\W_]+")


def slugify(value: str) -> str:
    """
    Build a URL-safe slug from a display name.

    Latin accents are folded ("Áo thun" -> "ao-thun"), letters from other
    scripts are kept as they are ("Điện thoại 电脑" -> "dien-thoai-电脑") and
    every run of other characters collapses to a single hyphen. A name with no
    letters or digits at all gets a short digest of the name instead, so the
    slug is never empty.
    """
    # đ/Đ have no decomposition
    folded = value.replace("đ", "d").replace("Đ", "D")
    decomposed = unicodedata.normalize("NFKD", folded)
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    slug = _SEPARATORS.sub("-", unicodedata.normalize("NFC", stripped).lower()).strip("-")
    if slug:
        return slug
    return hashlib.sha1(value.encode("utf-8")).hexdigest()[:10]
