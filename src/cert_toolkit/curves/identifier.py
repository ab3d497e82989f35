"""Map explicit EC domain parameters to a standard curve name.

A key read with explicit parameters (or reconstructed from raw numbers)
should still serialize as ``namedCurve`` when its parameters are those of a
standard curve. :class:`CurveIdentifier` performs that lookup against a
:class:`~cert_toolkit.curves.catalog.NamedCurveCatalog` it is given.
"""
from __future__ import annotations

import logging

from cert_toolkit.curves.catalog import (
    CurveDomainParameters,
    NamedCurveCatalog,
    NamedCurveParameters,
    default_catalog,
)

logger = logging.getLogger(__name__)


class CurveIdentifier:
    """Resolves domain parameters to named-curve parameters.

    Parameters
    ----------
    catalog:
        The named-curve catalog to search.
    """

    def __init__(self, catalog: NamedCurveCatalog) -> None:
        self._catalog = catalog

    @property
    def catalog(self) -> NamedCurveCatalog:
        return self._catalog

    def match(
        self, params: CurveDomainParameters
    ) -> NamedCurveParameters | CurveDomainParameters:
        """Return the named curve with the same order, cofactor, curve and generator.

        Parameters not present in the catalog are returned unchanged; that
        is not an error, since keys on non-standard curves are valid.

        Parameters
        ----------
        params:
            Domain parameters to identify.

        Returns
        -------
        NamedCurveParameters | CurveDomainParameters
            The catalog entry on an exact match, else *params* itself.
        """
        entry = self._catalog.lookup(params)
        if entry is None:
            logger.debug(
                "No named curve matches %d-bit domain parameters", params.p.bit_length()
            )
            return params
        logger.debug("Domain parameters match named curve %s", entry.name)
        return entry


def match_named_curve(
    params: CurveDomainParameters,
    catalog: NamedCurveCatalog | None = None,
) -> NamedCurveParameters | CurveDomainParameters:
    """Identify *params* against *catalog* (the default catalog if omitted)."""
    if catalog is None:
        catalog = default_catalog()
    return CurveIdentifier(catalog).match(params)
