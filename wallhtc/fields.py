import numbers
import os
import re

import numpy as np
from PyFoam.Basics.DataStructures import Dimension, Field
from PyFoam.RunDictionary.ParsedParameterFile import ParsedParameterFile, WriteParameterFile

from wallhtc.config import unquote
from wallhtc.exceptions import MissingFieldError

# Dimension sets in OpenFOAM order [kg m s K mol A cd]
DIMLESS = (0, 0, 0, 0, 0, 0, 0)
KINEMATIC_VISCOSITY = (0, 2, -1, 0, 0, 0, 0)
HEAT_TRANSFER_COEFF = (1, 0, -3, -1, 0, 0, 0)


class ScalarField:
    """Cell values plus one value array per boundary patch"""
    def __init__(self, name, internal, boundary, dimensions=DIMLESS):
        self.name = name
        self.internal = np.asarray(internal, dtype=float)
        self.boundary = [np.asarray(values, dtype=float) for values in boundary]
        self.dimensions = tuple(dimensions)

    @classmethod
    def zeros(cls, name, mesh, dimensions=DIMLESS):
        return cls(
            name,
            np.zeros(mesh.n_cells),
            [np.zeros(patch.size) for patch in mesh.boundary],
            dimensions
            )

    @classmethod
    def uniform(cls, name, mesh, value, dimensions=DIMLESS):
        return cls(
            name,
            np.full(mesh.n_cells, float(value)),
            [np.full(patch.size, float(value)) for patch in mesh.boundary],
            dimensions
            )

    def copy(self, name=None):
        return ScalarField(
            name or self.name,
            self.internal.copy(),
            [values.copy() for values in self.boundary],
            self.dimensions
            )

    def __repr__(self):
        return 'ScalarField({!r}, cells={}, patches={})'.format(
            self.name, len(self.internal), len(self.boundary)
            )


class ObjectRegistry:
    """Named fields of one mesh region at the current time"""
    def __init__(self, mesh, time=0.0, time_name=None):
        self.mesh = mesh
        self.time = float(time)
        self.time_name = time_name if time_name is not None else '{:g}'.format(self.time)
        self._objects = {}

    def set_time(self, time, time_name=None):
        self.time = float(time)
        self.time_name = time_name if time_name is not None else '{:g}'.format(self.time)

    def names(self):
        return list(self._objects)

    def found(self, name):
        return name in self._objects

    def lookup(self, name):
        if name not in self._objects:
            raise MissingFieldError(name, self.names())
        return self._objects[name]

    def store(self, field):
        """Register a field, replacing any previous field of the same name"""
        self._objects[field.name] = field
        return field

    def remove(self, name):
        return self._objects.pop(name, None) is not None


class CaseRegistry(ObjectRegistry):
    """Registry that falls back to the field files of a case time directory.

    Fields read from disk are only kept until the time changes, so every
    time step sees the files written for it.
    """
    def __init__(self, case, mesh, region=None, time=0.0, time_name=None):
        ObjectRegistry.__init__(self, mesh, time, time_name)
        self.case = case
        self.region = region
        self._loaded = set()

    def set_time(self, time, time_name=None):
        ObjectRegistry.set_time(self, time, time_name)
        for name in self._loaded:
            self._objects.pop(name, None)
        self._loaded.clear()

    def field_path(self, name):
        return os.path.join(self.case.region_time_dir(self.time_name, self.region), name)

    def found(self, name):
        if ObjectRegistry.found(self, name) or _exists(self.field_path(name)):
            return True
        return name == 'nu' and self._laminar_viscosity() is not None

    def lookup(self, name):
        if ObjectRegistry.found(self, name):
            return ObjectRegistry.lookup(self, name)

        path = self.field_path(name)
        if _exists(path):
            field = read_field(path, self.mesh, name)
        elif name == 'nu' and self._laminar_viscosity() is not None:
            field = ScalarField.uniform(
                name, self.mesh, self._laminar_viscosity(), KINEMATIC_VISCOSITY
                )
        else:
            raise MissingFieldError(name, self.names() + self._field_files())

        self._loaded.add(name)
        return self.store(field)

    def _field_files(self):
        timedir = self.case.region_time_dir(self.time_name, self.region)
        if not os.path.isdir(timedir):
            return []
        return [f for f in os.listdir(timedir) if os.path.isfile(os.path.join(timedir, f))]

    def _laminar_viscosity(self):
        """Uniform nu of the laminar transport model, None if not specified"""
        constantdir = self.case.region_constant_dir(self.region)
        for filename in ['transportProperties', 'physicalProperties']:
            path = os.path.join(constantdir, filename)
            if not _exists(path):
                continue
            properties = ParsedParameterFile(path)
            if 'nu' in properties:
                return dimensioned_value(properties['nu'])
        return None


def dimensioned_value(entry):
    """Scalar value of an entry like 'nu [0 2 -1 0 0 0 0] 1.5e-05'"""
    if isinstance(entry, (list, tuple)):
        entry = entry[-1]
    if hasattr(entry, 'value'):
        entry = entry.value
    return float(entry)


def read_field(path, mesh, name=None):
    """Read an ASCII volScalarField file on the given mesh"""
    fieldfile = ParsedParameterFile(path)
    name = name or os.path.basename(path)

    internal = _values(fieldfile['internalField'], mesh.n_cells, name)
    boundaryField = fieldfile['boundaryField']

    boundary = []
    for patch in mesh.boundary:
        entry = _patch_entry(boundaryField, patch.name)
        if patch.size == 0:
            boundary.append(np.zeros(0))
        elif entry is not None and 'value' in entry:
            boundary.append(_values(entry['value'], patch.size, name + '.' + patch.name))
        else:
            # Patches without value, e.g. zeroGradient, take the cell values
            boundary.append(internal[mesh.face_cells(patch.index)])

    dimensions = fieldfile['dimensions'] if 'dimensions' in fieldfile else DIMLESS
    if hasattr(dimensions, 'dims'):
        dimensions = dimensions.dims
    return ScalarField(name, internal, boundary, [int(d) for d in dimensions])


def write_field(field, mesh, path):
    """Write the field as ASCII volScalarField with calculated patches"""
    fieldfile = WriteParameterFile(path, className='volScalarField')
    fieldfile['dimensions'] = Dimension(*field.dimensions)
    fieldfile['internalField'] = _field_entry(field.internal)

    boundaryField = {}
    for patch in mesh.boundary:
        if patch.type == 'empty':
            boundaryField[patch.name] = {'type': 'empty'}
        else:
            boundaryField[patch.name] = {
                'type': 'calculated',
                'value': _field_entry(field.boundary[patch.index])
            }
    fieldfile['boundaryField'] = boundaryField
    fieldfile.writeFile()


def _values(value, size, name):
    if hasattr(value, 'val'):
        value = value.val
    if isinstance(value, numbers.Real):
        return np.full(size, float(value))

    values = np.asarray([float(v) for v in value], dtype=float)
    if len(values) != size:
        raise ValueError(
            'Size {} of {} does not match mesh size {}'.format(len(values), name, size)
            )
    return values


def _field_entry(values):
    if len(values) == 0 or np.all(values == values[0]):
        return Field(float(values[0]) if len(values) else 0.0)
    return Field([float(v) for v in values], name='List<scalar>')


def _patch_entry(boundaryField, patchname):
    """Boundary entry of a patch, either by name or by a regular expression key"""
    if patchname in boundaryField:
        return boundaryField[patchname]
    for key in boundaryField:
        if not isinstance(key, str) or not key.startswith('"'):
            continue
        if re.fullmatch(unquote(key), patchname):
            return boundaryField[key]
    return None


def _exists(path):
    return os.path.exists(path) or os.path.exists(path + '.gz')
