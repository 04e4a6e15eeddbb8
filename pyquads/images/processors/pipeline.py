from typing import Any, Dict, List, Optional, Union

from pyquads.images import Image, ImageProcessor
from pyquads.mixins import PipelineMixin


class Pipeline(ImageProcessor, PipelineMixin):
    """Runs a list of image processors one after another.

    Steps can be given as processors or as configs, so a whole detection can be configured at once:

    .. code-block:: yaml

       class: pyquads.images.processors.Pipeline
       context:
         workers: 4
       steps:
         - class: pyquads.images.processors.detection.Threshold
           threshold: 3.0
         - class: pyquads.images.processors.detection.ConnectedComponents
         - class: pyquads.images.processors.quads.Quads
           max_stars: 50

    The compute context of the pipeline is handed down to all steps created from configs.
    """

    __module__ = "pyquads.images.processors"

    def __init__(self, steps: Optional[List[Union[Dict[str, Any], ImageProcessor]]] = None, **kwargs: Any):
        ImageProcessor.__init__(self, **kwargs)
        PipelineMixin.__init__(self, steps)

    async def __call__(self, image: Image) -> Image:
        return await self.run_pipeline(image)

    async def reset(self) -> None:
        await self.reset_pipeline()


__all__ = ["Pipeline"]
