# MIT License (see LICENSE)
import numpy as np
import pytest
from plastic_sim.types import Particle
from plastic_sim.collision.resolver import separate_pair, resolve_particle_collisions


def test_overlapping_pair_separates_to_contact():
    """One pass pushes an overlapping pair apart by half the overlap each."""
    r = 0.5
    pa = Particle(position=(0.0, 0.0), radius=r)
    pb = Particle(position=(0.6, 0.0), radius=r)
    n = resolve_particle_collisions([pa, pb], radius=r)

    assert n == 1
    np.testing.assert_allclose(pa.position, (-0.2, 0.0))
    np.testing.assert_allclose(pb.position, (0.8, 0.0))
    assert np.linalg.norm(pb.position - pa.position) == pytest.approx(2 * r)


def test_separation_is_monotonic():
    """Distance after a pass is never smaller than before, for any overlapping pair."""
    rng = np.random.default_rng(3)
    r = 0.3
    for dim in (2, 3):
        particles = [Particle(position=rng.uniform(-0.5, 0.5, size=dim), radius=r) for _ in range(6)]
        before = [p.position.copy() for p in particles]
        for i in range(len(particles)):
            for j in range(i + 1, len(particles)):
                d0 = np.linalg.norm(before[j] - before[i])
                if d0 == 0 or d0 >= 2 * r:
                    continue
                pa = Particle(position=before[i], radius=r)
                pb = Particle(position=before[j], radius=r)
                separate_pair(pa, pb, 2 * r)
                assert np.linalg.norm(pb.position - pa.position) >= d0


def test_coincident_pair_is_skipped():
    pa = Particle(position=(1.0, 1.0, 1.0))
    pb = Particle(position=(1.0, 1.0, 1.0))
    assert resolve_particle_collisions([pa, pb], radius=0.5) == 0
    np.testing.assert_array_equal(pa.position, pb.position)


def test_distant_pair_untouched():
    pa = Particle(position=(0.0, 0.0))
    pb = Particle(position=(5.0, 0.0))
    assert not separate_pair(pa, pb, 1.0)
    np.testing.assert_array_equal(pb.position, (5.0, 0.0))


def test_per_particle_radii_when_no_common_radius():
    pa = Particle(position=(0.0, 0.0), radius=0.2)
    pb = Particle(position=(0.4, 0.0), radius=0.4)
    resolve_particle_collisions([pa, pb])
    assert np.linalg.norm(pb.position - pa.position) == pytest.approx(0.6)


def test_centroid_preserved():
    rng = np.random.default_rng(11)
    particles = [Particle(position=rng.uniform(-0.3, 0.3, size=3), radius=0.2) for _ in range(8)]
    c0 = np.mean([p.position for p in particles], axis=0)
    resolve_particle_collisions(particles, radius=0.2)
    c1 = np.mean([p.position for p in particles], axis=0)
    np.testing.assert_allclose(c1, c0, atol=1e-12)
