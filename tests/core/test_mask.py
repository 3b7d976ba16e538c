from torchlight.core.registry import ComponentRegistry


# Local components keep these tests independent of the others
class CompA:
    pass


class CompB:
    pass


class CompC:
    pass


def test_registry_assigns_unique_ids():
    id_a = ComponentRegistry.get_id(CompA)
    id_b = ComponentRegistry.get_id(CompB)

    assert isinstance(id_a, int)
    assert id_a != id_b


def test_registry_assigns_powers_of_two():
    mask_a = ComponentRegistry.get_mask(CompA)
    mask_b = ComponentRegistry.get_mask(CompB)

    assert (mask_a & (mask_a - 1)) == 0
    assert (mask_b & (mask_b - 1)) == 0
    assert (mask_a & mask_b) == 0


def test_mask_composition():
    mask_a = ComponentRegistry.get_mask(CompA)
    mask_b = ComponentRegistry.get_mask(CompB)

    combined = mask_a | mask_b

    assert (combined & mask_a) == mask_a
    assert (combined & mask_b) == mask_b

    mask_c = ComponentRegistry.get_mask(CompC)
    assert (combined & mask_c) == 0


def test_registry_determinism():
    assert ComponentRegistry.get_id(CompA) == ComponentRegistry.get_id(CompA)
