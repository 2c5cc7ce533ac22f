"""Shared fixtures: a stub geometry with prescribed delta coefficients and a
single hex cell OpenFOAM case written to a temporary directory."""
import os

import numpy as np
import pytest

from wallhtc.fields import KINEMATIC_VISCOSITY, ObjectRegistry, ScalarField
from wallhtc.mesh import Patch

FOAMHEADER = """FoamFile
{{
    version     2.0;
    format      ascii;
    class       {cls};
    object      {obj};
}}

"""


class StubMesh:
    """Geometry with given patch delta coefficients and face areas"""
    def __init__(self, n_cells, patches):
        self.n_cells = n_cells
        self.boundary = []
        self._delta_coeffs = {}
        self._mag_sf = {}
        start = n_cells * 3
        for i, (name, patchtype, deltaCoeffs, magSf) in enumerate(patches):
            self.boundary.append(Patch(i, name, patchtype, len(deltaCoeffs), start))
            self._delta_coeffs[i] = np.asarray(deltaCoeffs, dtype=float)
            self._mag_sf[i] = np.asarray(magSf, dtype=float)
            start += len(deltaCoeffs)

    def boundary_list(self):
        return [(p.index, p.name, p.is_wall) for p in self.boundary]

    def delta_coeffs(self, patchi):
        return self._delta_coeffs[patchi]

    def mag_sf(self, patchi):
        return self._mag_sf[patchi]


@pytest.fixture
def scenario_mesh():
    """inlet and outlet patches plus one wall patch wallA"""
    return StubMesh(4, [
        ('inlet', 'patch', [10.0, 10.0], [1.0, 1.0]),
        ('outlet', 'patch', [10.0, 10.0], [1.0, 1.0]),
        ('wallA', 'wall', [200.0, 100.0], [1.0, 3.0]),
        ])


@pytest.fixture
def entry():
    return {'rho': 1.225, 'Cp': 1005, 'Prl': 0.707, 'Prt': 0.9}


def make_field(name, mesh, boundary, internal=1.0):
    """Field with uniform internal value and the given patch values"""
    return ScalarField(
        name,
        np.full(mesh.n_cells, internal),
        [np.asarray(boundary.get(p.name, np.full(p.size, internal)), dtype=float)
         for p in mesh.boundary],
        KINEMATIC_VISCOSITY
        )


@pytest.fixture
def scenario_fields(scenario_mesh):
    nu = make_field('nu', scenario_mesh, {'wallA': [1.5e-5, 1.5e-5]}, 1.5e-5)
    nut = make_field('nut', scenario_mesh, {'wallA': [3.0e-5, 0.0]}, 5.0e-5)
    return nu, nut


@pytest.fixture
def registry(scenario_mesh, scenario_fields):
    registry = ObjectRegistry(scenario_mesh, time=1.0)
    for field in scenario_fields:
        registry.store(field)
    return registry


def write_foam_file(path, cls, obj, body):
    directory = os.path.dirname(path)
    if not os.path.exists(directory):
        os.makedirs(directory)
    with open(path, 'w') as f:
        f.write(FOAMHEADER.format(cls=cls, obj=obj))
        f.write(body)


HEX_BOUNDARY = """5
(
    lowerWall
    {
        type            wall;
        nFaces          1;
        startFace       0;
    }
    upperWall
    {
        type            wall;
        nFaces          1;
        startFace       1;
    }
    inlet
    {
        type            patch;
        nFaces          1;
        startFace       2;
    }
    outlet
    {
        type            patch;
        nFaces          1;
        startFace       3;
    }
    sides
    {
        type            empty;
        nFaces          2;
        startFace       4;
    }
)
"""

NUT_FIELD = """dimensions      [0 2 -1 0 0 0 0];

internalField   uniform 4e-05;

boundaryField
{
    lowerWall
    {
        type            nutkWallFunction;
        value           uniform 3e-05;
    }
    upperWall
    {
        type            nutkWallFunction;
        value           uniform 3e-05;
    }
    inlet
    {
        type            calculated;
        value           uniform 3e-05;
    }
    outlet
    {
        type            zeroGradient;
    }
    sides
    {
        type            empty;
    }
}
"""

CONTROLDICT = """application     simpleFoam;

startFrom       latestTime;

startTime       0;

stopAt          endTime;

endTime         100;

deltaT          1;

writeControl    timeStep;

writeInterval   100;

functions
{
    wallHeatTransferCoeff1
    {
        type        wallHeatTransferCoeff;
        libs        ("libfieldFunctionObjects.so");
        patches     (".*Wall");
        rho         1.225;
        Cp          1005;
        Prl         0.707;
        Prt         0.9;
    }
}
"""


@pytest.fixture
def hex_case(tmp_path):
    """Unit cube with one cell, two wall patches and nut written at time 100"""
    case = str(tmp_path / 'hexCase')
    polymesh = os.path.join(case, 'constant', 'polyMesh')

    write_foam_file(os.path.join(polymesh, 'points'), 'vectorField', 'points', """8
(
(0 0 0)
(1 0 0)
(1 1 0)
(0 1 0)
(0 0 1)
(1 0 1)
(1 1 1)
(0 1 1)
)
""")
    write_foam_file(os.path.join(polymesh, 'faces'), 'faceList', 'faces', """6
(
4(0 3 2 1)
4(4 5 6 7)
4(0 4 7 3)
4(1 2 6 5)
4(0 1 5 4)
4(3 7 6 2)
)
""")
    write_foam_file(os.path.join(polymesh, 'owner'), 'labelList', 'owner', """6
(
0
0
0
0
0
0
)
""")
    write_foam_file(os.path.join(polymesh, 'neighbour'), 'labelList', 'neighbour', """0
(
)
""")
    write_foam_file(os.path.join(polymesh, 'boundary'), 'polyBoundaryMesh', 'boundary', HEX_BOUNDARY)

    write_foam_file(
        os.path.join(case, 'constant', 'transportProperties'), 'dictionary', 'transportProperties',
        "transportModel  Newtonian;\n\nnu              1.5e-05;\n"
        )
    write_foam_file(os.path.join(case, 'system', 'controlDict'), 'dictionary', 'controlDict', CONTROLDICT)
    write_foam_file(os.path.join(case, '0', 'U'), 'volVectorField', 'U', "dimensions [0 1 -1 0 0 0 0];\n")
    write_foam_file(os.path.join(case, '100', 'nut'), 'volScalarField', 'nut', NUT_FIELD)
    return case
