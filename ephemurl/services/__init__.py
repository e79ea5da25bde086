from ephemurl.services.mapping_service import MappingService


__all__ = ['MappingService']
