from __future__ import annotations
import copy
from typing import TypeVar, Optional, Type, Dict, Any, cast

import numpy as np
from astropy.io import fits
from astropy.table import Table
from numpy.typing import NDArray

MetaClass = TypeVar("MetaClass")


class Image:
    """Image class."""

    __module__ = "pyquads.images"

    def __init__(
        self,
        data: Optional[NDArray[Any]] = None,
        header: Optional[fits.Header] = None,
        mask: Optional[NDArray[Any]] = None,
        catalog: Optional[Table] = None,
        meta: Optional[Dict[Any, Any]] = None,
        *args: Any,
        **kwargs: Any,
    ):
        """Init a new image.

        Args:
            data: Numpy array containing data for image.
            header: Header for the new image.
            mask: Binary mask for the image, e.g. from a threshold.
            catalog: Catalog table.
            meta: Dictionary with meta information.
        """

        # store
        self.data = data
        self.header = fits.Header() if header is None else header.copy()
        self.mask = None if mask is None else np.copy(mask)
        self.catalog = None if catalog is None else catalog.copy()
        self.meta = {} if meta is None else copy.copy(meta)

        # add basic header stuff
        if data is not None:
            self.header["NAXIS1"] = data.shape[1]
            self.header["NAXIS2"] = data.shape[0]

    def __copy__(self) -> Image:
        """Returns a shallow copy of this image."""
        return self.copy()

    def copy(self) -> Image:
        """Returns a copy of this image.

        Header, mask and catalog are copied, the data array and the meta objects are shared.
        """
        return Image(
            data=self.data,
            header=self.header,
            mask=self.mask,
            catalog=self.catalog,
            meta=self.meta,
        )

    @property
    def safe_data(self) -> Optional[NDArray[Any]]:
        """Returns data or None, if image has no data."""
        return self.data if self.data is not None and self.data.size > 0 else None

    @property
    def safe_mask(self) -> Optional[NDArray[Any]]:
        """Returns mask or None, if image has no mask."""
        return self.mask if self.mask is not None and self.mask.size > 0 else None

    @property
    def safe_catalog(self) -> Optional[Table]:
        """Returns catalog or None, if image has no catalog."""
        return self.catalog

    @property
    def height(self) -> Optional[int]:
        """Height of image in pixels, taken from data, mask or header."""
        if self.data is not None:
            return int(self.data.shape[0])
        if self.mask is not None:
            return int(self.mask.shape[0])
        return int(self.header["NAXIS2"]) if "NAXIS2" in self.header else None

    @property
    def width(self) -> Optional[int]:
        """Width of image in pixels, taken from data, mask or header."""
        if self.data is not None:
            return int(self.data.shape[1])
        if self.mask is not None:
            return int(self.mask.shape[1])
        return int(self.header["NAXIS1"]) if "NAXIS1" in self.header else None

    def set_meta(self, meta: Any) -> None:
        """Sets meta information, storing it under it class.

        Note that it is possible to store, e.g., strings, but they would be stored as img.meta[str] and be overwritten
        with every new string, which is probably not what you want. Use the img.meta dict directly for this and
        set_meta/get_meta only for class-based data.

        Args:
            meta: Meta information to store.
        """

        # store it
        self.meta[meta.__class__] = meta

    def has_meta(self, meta_class: Type[MetaClass]) -> bool:
        """Whether meta exists."""
        return meta_class in self.meta

    def get_meta(self, meta_class: Type[MetaClass]) -> MetaClass:
        """Returns meta information, assuming that it is stored under the class of the object.

        Args:
            meta_class: Class to return meta information for.

        Returns:
            Meta information of the given class.
        """
        # return default?
        if meta_class not in self.meta:
            raise ValueError("Meta value not found.")

        # correct type?
        if not isinstance(self.meta[meta_class], meta_class):
            raise ValueError("Stored meta information is of wrong type.")

        # return it
        return cast(MetaClass, self.meta[meta_class])

    def get_meta_safe(self, meta_class: Type[MetaClass], default: Optional[MetaClass] = None) -> Optional[MetaClass]:
        """Calls get_meta in a safe way and returns default value in case of an exception."""

        try:
            return self.get_meta(meta_class)
        except ValueError:
            return default


__all__ = ["Image"]
