import logging
from typing import Union, Dict, Any, Optional

from pyquads.images import ImageProcessor, Image

import pyquads.utils.exceptions as exc

log = logging.getLogger(__name__)


class ExceptionHandler(ImageProcessor):
    """Runs another processor and turns its non-fatal errors into warnings.

    On a non-fatal :class:`~pyquads.utils.exceptions.PyQuadsError`, a copy of the input image is returned, optionally
    with the header keyword ``error_header`` set to 1. Fatal errors are raised again.
    """

    __module__ = "pyquads.images.processors"

    def __init__(
        self, processor: Union[ImageProcessor, Dict[str, Any]], error_header: Optional[str] = None, **kwargs: Any
    ) -> None:
        super().__init__(**kwargs)

        self._processor: ImageProcessor = self.add_child_object(processor, ImageProcessor)
        self._error_header = error_header

    async def __call__(self, image: Image) -> Image:
        try:
            return await self._processor(image)
        except exc.PyQuadsError as e:
            if e.fatal:
                raise
            return await self._handle_error(image, e)

    async def _handle_error(self, image: Image, error: exc.PyQuadsError) -> Image:
        log.warning(str(error))

        output_image = image.copy()

        if self._error_header is not None:
            output_image.header[self._error_header] = 1

        return output_image

    async def reset(self) -> None:
        await self._processor.reset()


__all__ = ["ExceptionHandler"]
