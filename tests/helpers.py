"""Body construction helper shared by the tests."""

from gravity_sim.physics.body import Body


def make_body(body_id, mass=1.0, radius=1.0, position=(0.0, 0.0, 0.0), velocity=(0.0, 0.0, 0.0),
              body_type="planet", **kwargs):
    return Body(
        id=body_id,
        name=kwargs.pop("name", str(body_id).title()),
        type=body_type,
        mass=mass,
        radius=radius,
        position=position,
        velocity=velocity,
        **kwargs,
    )
