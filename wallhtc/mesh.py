from collections import namedtuple
import os

import numpy as np
from PyFoam.RunDictionary.ParsedParameterFile import ParsedBoundaryDict, ParsedParameterFile

# Patch types that are treated as solid walls
WALL_TYPES = ('wall', 'mappedWall')

VSMALL = 1e-300


class Patch(namedtuple('Patch', ['index', 'name', 'type', 'nFaces', 'startFace'])):
    """One boundary region of the mesh as listed in polyMesh/boundary"""
    __slots__ = ()

    @property
    def size(self):
        """Number of field values on the patch, empty patches hold none"""
        if self.type == 'empty':
            return 0
        return self.nFaces

    @property
    def is_wall(self):
        return self.type in WALL_TYPES

    def faces(self):
        return slice(self.startFace, self.startFace + self.size)


class Mesh:
    """Finite volume mesh geometry needed for boundary evaluation.

    Face centres and areas as well as cell centres are calculated the way
    OpenFOAM does: faces are split into triangles around their average point,
    cells into pyramids around the average of their face centres.
    """
    def __init__(self, points, faces, owner, neighbour, boundary):
        self.points = np.asarray(points, dtype=float).reshape(-1, 3)
        self.faces = [np.asarray(face, dtype=int) for face in faces]
        self.owner = np.asarray(owner, dtype=int)
        self.neighbour = np.asarray(neighbour, dtype=int)

        if len(self.owner) != len(self.faces):
            raise ValueError(
                'Mesh has {} faces but {} owner entries'.format(len(self.faces), len(self.owner))
                )

        self.boundary = [
            patch if isinstance(patch, Patch) else Patch(i, *patch)
            for i, patch in enumerate(boundary)
            ]
        self.n_cells = int(max(
            self.owner.max(initial=-1), self.neighbour.max(initial=-1)
            )) + 1

        self._face_centres = None
        self._face_areas = None
        self._cell_centres = None
        self._cell_volumes = None

    @classmethod
    def read(cls, polymeshdir):
        """Read an ASCII mesh from a polyMesh directory"""
        points = _read_list(os.path.join(polymeshdir, 'points'))
        faces = _read_list(os.path.join(polymeshdir, 'faces'))
        owner = _read_list(os.path.join(polymeshdir, 'owner'))
        neighbour = _read_list(os.path.join(polymeshdir, 'neighbour'))

        boundarydict = ParsedBoundaryDict(os.path.join(polymeshdir, 'boundary'))
        boundary = []
        for name in boundarydict.content:
            entry = boundarydict[name]
            boundary.append(
                (name, entry['type'], int(entry['nFaces']), int(entry['startFace']))
                )

        points = [[float(component) for component in point] for point in points]
        faces = [[int(label) for label in face] for face in faces]
        return cls(points, faces, owner, neighbour, boundary)

    def boundary_list(self):
        """Return (index, name, is_wall) for every patch"""
        return [(patch.index, patch.name, patch.is_wall) for patch in self.boundary]

    def patch_index(self, name):
        for patch in self.boundary:
            if patch.name == name:
                return patch.index
        raise KeyError(
            'Patch {} not existent. Try one of {}'.format(name, [p.name for p in self.boundary])
            )

    def patch_sizes(self):
        return [patch.size for patch in self.boundary]

    @property
    def face_centres(self):
        if self._face_centres is None:
            self._calc_face_centres_and_areas()
        return self._face_centres

    @property
    def face_areas(self):
        if self._face_areas is None:
            self._calc_face_centres_and_areas()
        return self._face_areas

    @property
    def cell_centres(self):
        if self._cell_centres is None:
            self._calc_cell_centres_and_volumes()
        return self._cell_centres

    @property
    def cell_volumes(self):
        if self._cell_volumes is None:
            self._calc_cell_centres_and_volumes()
        return self._cell_volumes

    def face_cells(self, patchi):
        """Owner cells of the patch faces"""
        return self.owner[self.boundary[patchi].faces()]

    def mag_sf(self, patchi):
        """Face area magnitudes of a patch"""
        return np.linalg.norm(self.face_areas[self.boundary[patchi].faces()], axis=1)

    def delta_coeffs(self, patchi):
        """Reciprocal wall-normal distance from the patch face centres to the owner cell centres"""
        faces = self.boundary[patchi].faces()
        delta = self.face_centres[faces] - self.cell_centres[self.owner[faces]]
        Sf = self.face_areas[faces]
        nf = Sf / np.maximum(np.linalg.norm(Sf, axis=1), VSMALL)[:, np.newaxis]
        return 1.0 / np.abs(np.einsum('ij,ij->i', nf, delta))

    def _calc_face_centres_and_areas(self):
        n_faces = len(self.faces)
        centres = np.zeros((n_faces, 3))
        areas = np.zeros((n_faces, 3))

        sizes = np.array([len(face) for face in self.faces], dtype=int)
        # Vectorise over all faces with the same number of points
        for size in np.unique(sizes):
            facei = np.flatnonzero(sizes == size)
            labels = np.array([self.faces[i] for i in facei])
            p = self.points[labels]

            if size == 3:
                centres[facei] = p.mean(axis=1)
                areas[facei] = 0.5 * np.cross(p[:, 1] - p[:, 0], p[:, 2] - p[:, 0])
                continue

            estimate = p.mean(axis=1)[:, np.newaxis, :]
            nextp = np.roll(p, -1, axis=1)
            c = p + nextp + estimate
            n = np.cross(nextp - p, estimate - p)
            a = np.linalg.norm(n, axis=2)

            sumN = n.sum(axis=1)
            sumA = a.sum(axis=1)
            sumAc = (a[:, :, np.newaxis] * c).sum(axis=1)

            degenerate = sumA < VSMALL
            sumA[degenerate] = 1.0
            centres[facei] = np.where(
                degenerate[:, np.newaxis], estimate[:, 0, :], sumAc / (3.0 * sumA[:, np.newaxis])
                )
            areas[facei] = np.where(degenerate[:, np.newaxis], 0.0, 0.5 * sumN)

        self._face_centres = centres
        self._face_areas = areas

    def _calc_cell_centres_and_volumes(self):
        fCtrs = self.face_centres
        fAreas = self.face_areas
        own = self.owner
        nei = self.neighbour
        internal = slice(0, len(nei))

        # Estimated cell centre is the average of the face centres
        cEst = np.zeros((self.n_cells, 3))
        nCellFaces = np.zeros(self.n_cells)
        np.add.at(cEst, own, fCtrs)
        np.add.at(nCellFaces, own, 1)
        np.add.at(cEst, nei, fCtrs[internal])
        np.add.at(nCellFaces, nei, 1)
        cEst /= np.maximum(nCellFaces, 1)[:, np.newaxis]

        centres = np.zeros((self.n_cells, 3))
        volumes = np.zeros(self.n_cells)

        pyr3Vol = np.einsum('ij,ij->i', fAreas, fCtrs - cEst[own])
        pc = 0.75 * fCtrs + 0.25 * cEst[own]
        np.add.at(centres, own, pyr3Vol[:, np.newaxis] * pc)
        np.add.at(volumes, own, pyr3Vol)

        pyr3Vol = np.einsum('ij,ij->i', fAreas[internal], cEst[nei] - fCtrs[internal])
        pc = 0.75 * fCtrs[internal] + 0.25 * cEst[nei]
        np.add.at(centres, nei, pyr3Vol[:, np.newaxis] * pc)
        np.add.at(volumes, nei, pyr3Vol)

        valid = np.abs(volumes) > VSMALL
        centres[valid] /= volumes[valid, np.newaxis]
        centres[~valid] = cEst[~valid]

        self._cell_centres = centres
        self._cell_volumes = volumes / 3.0


def _read_list(path):
    """Read the list stored in a polyMesh file"""
    return ParsedParameterFile(path, listDictWithHeader=True).content
