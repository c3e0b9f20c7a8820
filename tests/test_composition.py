import unittest

import numpy as np

from glassbatch.atomic_table import AtomicTable
from glassbatch.composition import (
    allocate_batch_weights,
    element_composition,
    gf_adjusted_view,
    molar_quantities,
    precursor_view,
    product_view,
)
from glassbatch.models import BatchComponent, ElementEntry

MASSES = {"H": 1.008, "B": 10.81, "O": 15.999, "Ca": 40.078, "La": 138.905}
MW = {
    "CaO": 40.078 + 15.999,
    "La2O3": 2 * 138.905 + 3 * 15.999,
    "H3BO3": 3 * 1.008 + 10.81 + 3 * 15.999,
    "B2O3": 2 * 10.81 + 3 * 15.999,
}
GF = 2 * MW["H3BO3"] / MW["B2O3"]


class CompositionTestCase(unittest.TestCase):
    def setUp(self):
        self.table = AtomicTable(ElementEntry(s, m) for s, m in MASSES.items())
        self.components = [
            BatchComponent("CaO", 30.0, "CaO"),
            BatchComponent("La2O3", 10.0, "La2O3"),
            BatchComponent("H3BO3", 60.0, "B2O3", precursor_moles=2.0, product_moles=1.0),
        ]


class TestAllocation(unittest.TestCase):
    def test_molar_quantities(self):
        molar = molar_quantities([30.0, 70.0], [10.0, None])
        np.testing.assert_allclose(molar, [3.0, 0.0])

    def test_weights_sum_to_desired_mass(self):
        for mass in (0.0, 1.0, 5.0, 250.0):
            with self.subTest(mass=mass):
                weights = allocate_batch_weights([3.0, 1.0, 6.0], mass)
                self.assertAlmostEqual(float(weights.sum()), mass)
                self.assertAlmostEqual(float(weights[0]), 0.3 * mass)

    def test_zero_total_gives_zeros(self):
        np.testing.assert_array_equal(allocate_batch_weights([0.0, 0.0], 5.0), [0.0, 0.0])

    def test_no_components(self):
        self.assertEqual(allocate_batch_weights([], 5.0).size, 0)


class TestPrecursorView(CompositionTestCase):
    def test_scenario(self):
        view = precursor_view(self.components, self.table, 5.0)
        expected_molar = [0.3 * MW["CaO"], 0.1 * MW["La2O3"], 0.6 * MW["H3BO3"]]
        total = sum(expected_molar)

        self.assertAlmostEqual(view.total_molar_quantity, total)
        self.assertAlmostEqual(view.total_batch_weight, 5.0)
        for row, molar in zip(view.rows, expected_molar):
            self.assertAlmostEqual(row.molar_quantity, molar)
            self.assertAlmostEqual(row.batch_weight, molar / total * 5.0)
            self.assertAlmostEqual(row.weight_percent, molar / total * 100.0)
            self.assertIsNone(row.gravimetric_factor)

    def test_unresolvable_component_gets_zero(self):
        components = self.components + [BatchComponent("Xx2", 0.0)]
        view = precursor_view(components, self.table, 5.0)
        self.assertEqual(len(view.rows), 4)
        self.assertIsNone(view.rows[3].molecular_weight)
        self.assertEqual(view.rows[3].batch_weight, 0.0)
        self.assertAlmostEqual(view.total_batch_weight, 5.0)

    def test_empty_table(self):
        view = precursor_view(self.components, AtomicTable(), 5.0)
        self.assertEqual(view.total_molar_quantity, 0.0)
        self.assertEqual(view.weights, (0.0, 0.0, 0.0))

    def test_zero_desired_mass(self):
        view = precursor_view(self.components, self.table, 0.0)
        self.assertEqual(view.weights, (0.0, 0.0, 0.0))
        self.assertTrue(all(row.weight_percent == 0.0 for row in view.rows))


class TestGFAdjustedView(CompositionTestCase):
    def test_substitutes_precursor_weight(self):
        plain = precursor_view(self.components, self.table, 5.0)
        view = gf_adjusted_view(self.components, self.table, 5.0, "H3BO3", GF)

        boric = view.rows[2]
        self.assertAlmostEqual(boric.effective_weight, MW["H3BO3"] * GF)
        self.assertAlmostEqual(boric.molar_quantity, 0.6 * MW["H3BO3"] * GF)
        self.assertEqual(boric.gravimetric_factor, GF)
        self.assertAlmostEqual(view.total_batch_weight, 5.0)
        # Raising one component's weight lowers everyone else's share
        self.assertLess(view.rows[0].batch_weight, plain.rows[0].batch_weight)
        self.assertGreater(boric.batch_weight, plain.rows[2].batch_weight)

    def test_without_factor_matches_precursor_view(self):
        plain = precursor_view(self.components, self.table, 5.0)
        self.assertEqual(gf_adjusted_view(self.components, self.table, 5.0, "H3BO3", None), plain)

    def test_without_matching_component_matches_precursor_view(self):
        plain = precursor_view(self.components, self.table, 5.0)
        self.assertEqual(gf_adjusted_view(self.components, self.table, 5.0, "Na2CO3", 1.7), plain)


class TestProductView(CompositionTestCase):
    def test_only_converted_components_reported(self):
        view = product_view(self.components, self.table, 5.0)
        total = 0.3 * MW["CaO"] + 0.1 * MW["La2O3"] + 0.6 * MW["H3BO3"] * GF

        self.assertEqual(len(view.rows), 1)
        row = view.rows[0]
        self.assertEqual(row.component.product_formula, "B2O3")
        self.assertAlmostEqual(row.gravimetric_factor, GF)
        self.assertAlmostEqual(row.molecular_weight, MW["H3BO3"])
        self.assertAlmostEqual(view.total_molar_quantity, total)
        self.assertAlmostEqual(row.batch_weight, 0.6 * MW["H3BO3"] * GF / total * 5.0)

    def test_unresolvable_product_excluded(self):
        components = [BatchComponent("H3BO3", 100.0, "Xx2O3", 2.0, 1.0)]
        view = product_view(components, self.table, 5.0)
        self.assertEqual(view.rows, ())
        # Still counted with a factor of 1
        self.assertAlmostEqual(view.total_molar_quantity, MW["H3BO3"])

    def test_empty_product_formula_falls_back_to_precursor(self):
        components = [BatchComponent("CaO", 100.0, "")]
        view = product_view(components, self.table, 5.0)
        self.assertEqual(view.rows, ())
        self.assertAlmostEqual(view.total_molar_quantity, MW["CaO"])


class TestElementComposition(CompositionTestCase):
    def test_scenario_breakdown(self):
        composition = element_composition(self.components, self.table)
        shares = {item.element: item.percentage for item in composition}

        # Ca 30, O 30+30+180, La 20, H 180, B 60
        self.assertEqual(set(shares), {"Ca", "O", "La", "H", "B"})
        self.assertAlmostEqual(sum(shares.values()), 100.0)
        self.assertAlmostEqual(shares["O"], 240.0 / 530.0 * 100.0)
        self.assertAlmostEqual(shares["La"], 20.0 / 530.0 * 100.0)

    def test_colors_are_hex(self):
        for item in element_composition(self.components, self.table):
            self.assertRegex(item.color, r"^#[0-9a-f]{6}$")

    def test_skips_blank_and_zero_components(self):
        components = [
            BatchComponent("", 50.0),
            BatchComponent("abc", 10.0),
            BatchComponent("CaO", 0.0),
            BatchComponent("SiO2", 40.0),
        ]
        shares = {i.element: i.percentage for i in element_composition(components)}
        self.assertEqual(set(shares), {"Si", "O"})
        self.assertAlmostEqual(shares["O"], 200.0 / 3.0)

    def test_unknown_symbols_dropped(self):
        components = [BatchComponent("SiO2", 50.0), BatchComponent("Xq", 50.0)]
        table = AtomicTable([ElementEntry("Si", 28.085), ElementEntry("O", 15.999)])
        shares = {i.element: i.percentage for i in element_composition(components, table)}
        self.assertEqual(set(shares), {"Si", "O"})
        self.assertAlmostEqual(shares["O"], 200.0 / 3.0)

    def test_partly_known_formula_keeps_known_symbols(self):
        table = AtomicTable([ElementEntry("O", 15.999)])
        composition = element_composition([BatchComponent("XqO2", 100.0)], table)
        shares = {i.element: i.percentage for i in composition}
        self.assertEqual(shares, {"O": 100.0})

    def test_empty_table_contributes_nothing(self):
        self.assertEqual(element_composition(self.components, AtomicTable()), [])

    def test_nothing_to_aggregate(self):
        self.assertEqual(element_composition([BatchComponent("", 100.0)]), [])
        self.assertEqual(element_composition([]), [])


if __name__ == '__main__':
    unittest.main()
