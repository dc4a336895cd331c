"""
Component registry for the agent portal
Frontend modules (header meta, notifications) register here by name and
are looked up from the module lists in the configuration.
"""


class ComponentRegistry:
    """Registry for frontend modules"""

    def __init__(self, kind):
        self.kind = kind
        self.components = {}

    def register_component(self, name, component_class):
        """Register a frontend module"""
        if name in self.components and self.components[name] is not component_class:
            raise ValueError(f"{self.kind} module already registered: {name}")
        self.components[name] = component_class

    def get_component(self, name):
        """Get a registered frontend module"""
        return self.components.get(name)

    def get_all_components(self):
        """Get all registered frontend modules"""
        return dict(self.components)


# Global registry instances
header_meta_registry = ComponentRegistry('header meta')
notification_registry = ComponentRegistry('notification')


def register_component(registry, name):
    """Decorator for registering frontend modules"""
    def decorator(component_class):
        registry.register_component(name, component_class)
        return component_class
    return decorator


__all__ = [
    'ComponentRegistry',
    'header_meta_registry',
    'notification_registry',
    'register_component',
]
