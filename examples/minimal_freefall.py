# examples/minimal_freefall.py
from particle_sim import ParticleWorld, Particle, Gravity

world = ParticleWorld(dt=1/240)

ball = world.add_particle(Particle.from_mass(
    1.0,
    position=(0.0, 10.0, 0.0),
    velocity=(0.0, 0.0, 0.0),
    damping=1.0,
))
world.register(ball, world.add_generator(Gravity((0.0, -9.81, 0.0))))

t_end = 1.0
while world.time < t_end:
    world.step()

print("t:", world.time)
print("pos:", world.particle(ball).position)
print("vel:", world.particle(ball).velocity)
