"""Property name transformations between snake_case and camel case forms"""


def to_upper_camel(name: str) -> str:
    """maxOverflow / max_overflow -> MaxOverflow"""
    if "_" in name:
        return "".join(part[:1].upper() + part[1:] for part in name.split("_") if part)
    return name[:1].upper() + name[1:]


def to_lower_camel(name: str) -> str:
    """max_overflow / MaxOverflow -> maxOverflow"""
    upper = to_upper_camel(name)
    return upper[:1].lower() + upper[1:]
