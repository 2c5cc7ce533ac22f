import re

from wallhtc.exceptions import ConfigurationError


def resolve(patterns, boundary):
    """Resolve patch name patterns into a set of patch indices.

    boundary is a sequence of (index, name, is_wall) entries. Without
    patterns every wall patch is selected. Patterns are regular expressions
    matched against the whole patch name; a matching patch is selected
    whatever its type.
    """
    if not patterns:
        patchset = frozenset(index for index, _, is_wall in boundary if is_wall)
        if not patchset:
            raise ConfigurationError('No wall patches found in boundary')
        return patchset

    try:
        regexes = [re.compile(pattern) for pattern in patterns]
    except re.error as error:
        raise ConfigurationError('Invalid patch pattern: {}'.format(error)) from error

    patchset = frozenset(
        index for index, name, _ in boundary
        if any(regex.fullmatch(name) for regex in regexes)
        )
    if not patchset:
        raise ConfigurationError(
            'No patches match {}. Available patches: {}'.format(
                list(patterns), [name for _, name, _ in boundary]
                )
            )
    return patchset
