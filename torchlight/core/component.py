class Component:
    """
    Base class for all components.
    In Torchlight, components should ideally be frozen @dataclasses;
    change them with world.mutate_component(eid, replace(...)).
    """

    pass
