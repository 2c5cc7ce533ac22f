from wallhtc.fields import HEAT_TRANSFER_COEFF, ScalarField

# Name of the field holding the heat transfer coefficient
FIELD_NAME = 'wallHeatTransferCoeff'


def heat_transfer_coeff(nu, nut, patchset, rho, Cp, Prl, Prt, mesh, name=FIELD_NAME):
    """Calculate the wall heat transfer coefficient from the Reynolds analogy.

    The laminar and turbulent viscosities act as thermal diffusivities scaled
    by their Prandtl numbers; dividing by the distance between the face and
    the centre of its cell gives the coefficient

        htc = rho*Cp*(nu/Prl + nut/Prt)*deltaCoeffs

    Only patches in patchset are evaluated, the internal field and all other
    patches stay zero. Inputs are not modified.
    """
    htc = ScalarField.zeros(name, mesh, HEAT_TRANSFER_COEFF)

    for patchi in sorted(patchset):
        if mesh.boundary[patchi].size == 0:
            continue
        diffusivity = nu.boundary[patchi] / Prl + nut.boundary[patchi] / Prt
        htc.boundary[patchi] = rho * Cp * diffusivity * mesh.delta_coeffs(patchi)

    return htc
