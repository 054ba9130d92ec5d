"""
Tests for the generation loop and the run_evolution entry point.
"""

import math
import unittest

from darwin.data_models import Organism, Parameters, to_population
from darwin.random_source import RandomSource
from darwin.selection import InsufficientPopulationError, select_pairs
from darwin.crossover import split_in_half, recombine, merge_populations
from darwin.engine import EngineState, EvolutionEngine, run_evolution
from darwin.summary import summarize


STARTING_ROWS = [[1, 2, 3], [4, 5, 6], [7, 8, 9], [10, 11, 12]]


class TestSingleGenerationPipeline(unittest.TestCase):
    """Walk one generation step by step on a fixed seed."""

    def setUp(self):
        self.population = to_population(STARTING_ROWS)
        self.rng = RandomSource(seed=2024)

    def test_pipeline_sizes(self):
        """Test sizes at every stage for 4 organisms and one pair."""
        selection = select_pairs(self.population, 1, self.rng)
        self.assertEqual(len(selection.selected), 2)
        self.assertEqual(len(selection.remaining), 2)

        halves = split_in_half(selection.selected)
        self.assertEqual(sorted(len(h) for h in halves), [1, 1, 2, 2])

        offspring = recombine(halves, self.rng)
        self.assertEqual(len(offspring), 2)
        self.assertEqual(sum(len(o) for o in offspring), 6)

        merged = merge_populations(selection.remaining, offspring)
        self.assertEqual(len(merged), 4)

    def test_engine_step_matches_pipeline(self):
        """Test that the engine records the same sizes as the manual walk."""
        params = Parameters(
            extinction_threshold=0.1,
            proliferation_threshold=0.9,
            generations=1,
            pairs_to_crossover=1
        )
        engine = EvolutionEngine(self.population, params, rng=self.rng)

        record = engine.step()

        self.assertEqual(record.generation, 0)
        self.assertEqual(record.pairs_selected, 1)
        self.assertEqual(record.merged_size, 4)
        self.assertEqual(record.duplicated + record.kept + record.removed, 4)
        self.assertEqual(record.population_size, len(engine.population))
        self.assertGreaterEqual(record.factor, 0.1 - 0.04)
        self.assertLessEqual(record.factor, 1.0)


class TestEvolutionEngine(unittest.TestCase):
    """Test engine lifecycle and loop behavior."""

    def setUp(self):
        self.params = Parameters(
            extinction_threshold=0.2,
            proliferation_threshold=0.8,
            generations=3,
            pairs_to_crossover=2
        )

    def test_state_transitions(self):
        """Test INITIALIZING -> RUNNING -> COMPLETED."""
        engine = EvolutionEngine(to_population(STARTING_ROWS), self.params, rng=RandomSource(seed=1))
        self.assertIs(engine.state, EngineState.INITIALIZING)

        engine.step()
        self.assertIs(engine.state, EngineState.RUNNING)
        self.assertEqual(engine.generation, 1)

        engine.step()
        engine.step()
        self.assertIs(engine.state, EngineState.COMPLETED)
        self.assertEqual(engine.generation, 3)

    def test_step_after_completion_raises(self):
        engine = EvolutionEngine(to_population(STARTING_ROWS), self.params, rng=RandomSource(seed=1))
        engine.run()

        with self.assertRaises(RuntimeError):
            engine.step()

    def test_run_executes_configured_generations(self):
        """Test history length and callback invocations."""
        seen = []
        engine = EvolutionEngine(
            to_population(STARTING_ROWS * 5),
            self.params,
            rng=RandomSource(seed=8),
            on_generation=seen.append
        )

        final = engine.run()

        self.assertEqual(len(engine.history), 3)
        self.assertEqual(seen, engine.history)
        self.assertEqual([r.generation for r in engine.history], [0, 1, 2])
        self.assertEqual(engine.history[-1].population_size, len(final))

    def test_each_generation_starts_from_previous_output(self):
        """Test merged size never exceeds the previous population size."""
        engine = EvolutionEngine(to_population(STARTING_ROWS * 5), self.params, rng=RandomSource(seed=21))
        previous_size = len(engine.population)

        for record in (engine.step() for _ in range(3)):
            # Selection removes 2k and recombination adds k back
            self.assertEqual(record.merged_size, previous_size - record.pairs_selected)
            previous_size = record.population_size

    def test_same_seed_reproduces_run(self):
        """Test deterministic seeding for tests."""
        population = to_population(STARTING_ROWS * 3)

        final_a, stats_a = run_evolution(population, self.params, rng=RandomSource(seed=77))
        final_b, stats_b = run_evolution(population, self.params, rng=RandomSource(seed=77))

        self.assertEqual(final_a, final_b)
        self.assertEqual(stats_a.perfect_fits, stats_b.perfect_fits)

    def test_input_population_is_not_modified(self):
        population = to_population(STARTING_ROWS * 2)
        snapshot = list(population)

        run_evolution(population, self.params, rng=RandomSource(seed=4))

        self.assertEqual(population, snapshot)

    def test_accepts_plain_integer_rows(self):
        engine = EvolutionEngine(STARTING_ROWS, self.params, rng=RandomSource(seed=4))

        self.assertTrue(all(isinstance(o, Organism) for o in engine.population))

    def test_zero_proliferation_threshold_doubles_population(self):
        """Test that every organism is duplicated when any score qualifies."""
        params = Parameters(
            extinction_threshold=0.5,
            proliferation_threshold=0.0,
            generations=1,
            pairs_to_crossover=1
        )

        final, _ = run_evolution(to_population(STARTING_ROWS), params, rng=RandomSource(seed=6))

        self.assertEqual(len(final), 8)

    def test_run_evolution_summary_matches_final_population(self):
        final, stats = run_evolution(to_population(STARTING_ROWS * 4), self.params, rng=RandomSource(seed=13))

        expected = summarize(final, self.params.proliferation_threshold)
        if final:
            self.assertAlmostEqual(stats.mean_fitness, expected.mean_fitness)
        else:
            self.assertTrue(math.isnan(stats.mean_fitness))
        self.assertEqual(stats.perfect_fits, expected.perfect_fits)


class TestSmallPopulations(unittest.TestCase):
    """Test selection policy for populations too small to pair."""

    def test_single_organism_runs_without_crossover(self):
        """Test default clamp-to-zero policy inside the loop."""
        params = Parameters(
            extinction_threshold=0.1,
            proliferation_threshold=0.9,
            generations=4,
            pairs_to_crossover=3
        )
        engine = EvolutionEngine([[0]], params, rng=RandomSource(seed=2))

        engine.run()

        first = engine.history[0]
        self.assertEqual(first.pairs_selected, 0)
        self.assertEqual(first.merged_size, 1)
        self.assertTrue(all(r.pairs_selected == 0 for r in engine.history if r.merged_size < 2))
        self.assertIs(engine.state, EngineState.COMPLETED)

    def test_strict_selection_aborts_run(self):
        """Test that a strict selection failure is fatal and leaves no partial output."""
        params = Parameters(
            extinction_threshold=0.1,
            proliferation_threshold=0.9,
            generations=2,
            pairs_to_crossover=1,
            strict_selection=True
        )
        engine = EvolutionEngine([[5, 5]], params, rng=RandomSource(seed=2))

        with self.assertRaises(InsufficientPopulationError):
            engine.run()

        self.assertEqual(engine.history, [])
        self.assertEqual(engine.population, [Organism((5, 5))])

    def test_empty_population_reaches_sentinel_summary(self):
        """Test that an empty population is a valid terminal state."""
        params = Parameters(
            extinction_threshold=0.1,
            proliferation_threshold=0.9,
            generations=2,
            pairs_to_crossover=1
        )

        final, stats = run_evolution([], params, rng=RandomSource(seed=3))

        self.assertEqual(final, [])
        self.assertTrue(math.isnan(stats.mean_fitness))
        self.assertEqual(stats.perfect_fits, 0)
        self.assertEqual(stats.reportable_mean(), 0.0)


if __name__ == '__main__':
    unittest.main()
