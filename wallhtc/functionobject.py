from wallhtc.config import Configuration
from wallhtc.exceptions import WriteOrderError
from wallhtc.kernel import FIELD_NAME, heat_transfer_coeff
from wallhtc.logfiles import patch_statistics
from wallhtc.patches import resolve
from wallhtc.writeobjects import WriteObjects

# Names of the viscosity fields provided by the flow solution
NU_FIELD = 'nu'
NUT_FIELD = 'nut'


class WallHeatTransferCoeff:
    """Calculate and write the incompressible flow heat transfer coefficient
    at wall patches as the field wallHeatTransferCoeff.

    All wall patches are included by default, the optional patches entry
    restricts the calculation to matching patches. Example entry:

        wallHeatTransferCoeff1
        {
            type        wallHeatTransferCoeff;
            region      fluid;
            patches     (".*Wall");
            rho         1.225;
            Cp          1005;
            Prl         0.707;
            Prt         0.9;
        }

    The collaborators are passed in: registry supplies the input fields, the
    mesh and the current time, logfiles receives one row per patch and write,
    writer persists a field and selection chooses the fields to persist.
    Writing the field can be switched off with an empty objects list, the log
    files are written regardless.
    """
    def __init__(self, name, entry, registry, logfiles, writer, selection=None):
        self.name = name
        self.registry = registry
        self.logfiles = logfiles
        self.writer = writer
        if selection is None:
            selection = WriteObjects([FIELD_NAME])
        self.selection = selection

        self.config = None
        self.patchset = frozenset()
        self._executed = False

        self.read(entry)

    @property
    def mesh(self):
        return self.registry.mesh

    def read(self, entry):
        """Read the function entry and select the patches"""
        if isinstance(entry, Configuration):
            config = entry
        else:
            config = Configuration.from_dict(entry)
        patchset = resolve(config.patches, self.mesh.boundary_list())

        # Replace the settings only when the new entry is valid
        self.config = config
        self.patchset = patchset
        self.selection.reset(config.objects)
        self.logfiles.reset()

        print('{} {}:'.format(type(self).__name__, self.name))
        print('    processing wall patches: {}'.format(self.patch_names()))
        return True

    reload = read

    def update_mesh(self, mesh):
        """Reselect the patches after the mesh topology changed"""
        patchset = resolve(self.config.patches, mesh.boundary_list())
        self.registry.mesh = mesh
        self.patchset = patchset
        self.logfiles.reset()
        self._executed = False

    def patch_names(self):
        return [self.mesh.boundary[patchi].name for patchi in sorted(self.patchset)]

    def execute(self):
        """Calculate the heat transfer coefficient and store it in the registry.
        Raises MissingFieldError if nu or nut are not available."""
        self._executed = False
        config = self.config

        nu = self.registry.lookup(NU_FIELD)
        nut = self.registry.lookup(NUT_FIELD)

        print('{} {} execute:'.format(type(self).__name__, self.name))
        htc = heat_transfer_coeff(
            nu, nut, self.patchset, config.rho, config.Cp, config.Prl, config.Prt, self.mesh
            )
        self.registry.store(htc)

        self._executed = True
        return True

    def write(self):
        """Write the field and the patch statistics of the last execute"""
        if not self._executed or not self.registry.found(FIELD_NAME):
            raise WriteOrderError(
                '{} {}: write() called without a successful execute()'.format(
                    type(self).__name__, self.name
                    )
                )
        self._executed = False

        print('{} {} write:'.format(type(self).__name__, self.name))
        for name in self.selection.selected():
            print('    writing field {}'.format(name))
            self.writer(self.registry.lookup(name))

        htc = self.registry.lookup(FIELD_NAME)
        for patchi in sorted(self.patchset):
            patch = self.mesh.boundary[patchi]
            values = htc.boundary[patchi]
            if len(values):
                weights = self.mesh.mag_sf(patchi)
            else:
                weights = values
            minHtc, maxHtc, averageHtc = patch_statistics(values, weights)
            self.logfiles.write_row(patch.name, self.registry.time, [minHtc, maxHtc, averageHtc])
            print('    min/max/average({}) = {}, {}, {}'.format(
                patch.name, minHtc, maxHtc, averageHtc
                ))
        return True
