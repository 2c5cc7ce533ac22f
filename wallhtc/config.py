from dataclasses import dataclass
import numbers
import os
import re

from PyFoam.RunDictionary.ParsedParameterFile import ParsedParameterFile

from wallhtc.exceptions import ConfigurationError

# Physical parameters every function entry has to provide
REQUIRED_SCALARS = ('rho', 'Cp', 'Prl', 'Prt')


@dataclass(frozen=True)
class Configuration:
    """Validated settings of one wallHeatTransferCoeff function entry.

    objects keeps three states: None writes every produced field,
    an empty tuple writes none and a non-empty tuple writes the listed ones.
    """
    rho: float
    Cp: float
    Prl: float
    Prt: float
    patches: tuple = ()
    region: str = None
    objects: tuple = None

    @classmethod
    def from_dict(cls, entry):
        """Create a configuration from a parsed function dictionary"""
        if entry is None:
            raise ConfigurationError('Function entry is empty')

        scalars = {key: _positive_scalar(entry, key) for key in REQUIRED_SCALARS}

        patches = tuple(_word_list(entry, 'patches', patterns=True) or ())
        objects = _word_list(entry, 'objects')
        if objects is not None:
            objects = tuple(objects)

        region = entry.get('region')
        if region is not None:
            region = unquote(str(region))

        return cls(patches=patches, region=region, objects=objects, **scalars)


def _positive_scalar(entry, key):
    if key not in entry:
        raise ConfigurationError(
            "Entry '{}' not found in function dictionary".format(key)
            )
    value = entry[key]
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise ConfigurationError(
            "Entry '{}' must be a number, got {!r}".format(key, value)
            )
    if not value > 0:
        raise ConfigurationError(
            "Entry '{}' must be positive, got {}".format(key, value)
            )
    return float(value)


def _word_list(entry, key, patterns=False):
    """Read a list of words, None if the key is absent. As patterns only
    quoted words are regular expressions, plain words match literally."""
    if key not in entry:
        return None
    value = entry[key]
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, (list, tuple)):
        raise ConfigurationError(
            "Entry '{}' must be a list of names, got {!r}".format(key, value)
            )
    words = []
    for item in value:
        if not isinstance(item, str):
            raise ConfigurationError(
                "Entry '{}' must only contain names, got {!r}".format(key, item)
                )
        word = unquote(item)
        if patterns and word == item:
            word = re.escape(word)
        words.append(word)
    return words


def unquote(word):
    """Strip the double quotes OpenFOAM uses to mark regular expressions"""
    if len(word) >= 2 and word[0] == word[-1] == '"':
        return word[1:-1]
    return word


def read_function_dict(systemdir, name, dictfile=None):
    """Read the function entry name from system/controlDict or
    from a separate dictionary file in the system directory"""
    if dictfile is not None:
        path = dictfile if os.path.isabs(dictfile) else os.path.join(systemdir, dictfile)
        functiondict = ParsedParameterFile(path).content
        # Files written for postProcess -dict hold the entry itself or a functions sub-dictionary
        if 'functions' in functiondict:
            functiondict = functiondict['functions']
        if name in functiondict:
            return functiondict[name]
        return functiondict

    controlDict = ParsedParameterFile(os.path.join(systemdir, 'controlDict'))
    functions = controlDict['functions'] if 'functions' in controlDict else {}
    if name not in functions:
        raise ConfigurationError(
            'Function {} not found in {}. Try one of {}'.format(
                name, os.path.join(systemdir, 'controlDict'), list(functions)
                )
            )
    return functions[name]


def read(systemdir, name, dictfile=None):
    return Configuration.from_dict(read_function_dict(systemdir, name, dictfile))
