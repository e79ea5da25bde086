from ephemurl.models.mapping_model import MappingModel
from ephemurl.models.mapping_page import MappingPage


__all__ = [
    'MappingModel',
    'MappingPage',
]
