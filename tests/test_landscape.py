"""
Landscape impact tests

Covers per-plant factors, costs, the environmental score, the 25-year
canopy-growth projection and recommendations.
"""

import pytest

from landscape import (
    calculate_landscape,
    environmental_score,
    landscape_recommendations,
    plant_factors,
    score_category,
    water_source_factor,
)
from models import LandscapeInput, PlantType, WaterSource


# ==================== FIXTURES ====================

@pytest.fixture
def shade_trees():
    return calculate_landscape(LandscapeInput(
        area_m2=100,
        plant_type=PlantType.SHADE_TREE,
        water_source=WaterSource.RAINWATER,
    ))


@pytest.fixture
def lawn():
    return calculate_landscape(LandscapeInput(
        area_m2=100,
        plant_type=PlantType.GRASS_TURF,
        water_source=WaterSource.DRINKING_WATER,
    ))


# ==================== FACTORS ====================

class TestFactors:

    def test_invalid_plant_type(self):
        with pytest.raises(ValueError, match="Invalid plant type selected"):
            plant_factors("Cactus")

    def test_invalid_plant_type_in_estimate(self):
        with pytest.raises(ValueError):
            calculate_landscape(LandscapeInput(area_m2=10, plant_type="Cactus"))

    def test_water_source_factors(self):
        assert water_source_factor(WaterSource.DRINKING_WATER) == 1.0
        assert water_source_factor("TreatedWater") == 0.8
        assert water_source_factor("Rainwater") == 0.6
        assert water_source_factor("Seawater") == 1.0


# ==================== ESTIMATE ====================

class TestCalculateLandscape:

    def test_annual_flows(self, shade_trees):
        assert shade_trees.co2_reduction_kg_per_year == 100.0
        assert shade_trees.co2_reduction_tons_per_year == 0.1
        assert shade_trees.o2_production_l_per_year == 3_650_000
        assert shade_trees.o2_production_m3_per_year == 3650.0
        # 400 L/m² on rainwater
        assert shade_trees.water_consumption_l_per_year == 24000
        assert shade_trees.water_consumption_m3_per_year == 24.0

    def test_default_costs(self, shade_trees):
        assert shade_trees.planting_cost == 1750
        # 262.5 rounds up
        assert shade_trees.annual_maintenance_cost == 263
        assert shade_trees.maintenance_years == 1
        assert shade_trees.total_cost == 2013

    def test_cost_override_and_years(self):
        result = calculate_landscape(LandscapeInput(
            area_m2=100, plant_type="ShadeTree", cost_per_m2=10, maintenance_years=10,
        ))
        assert result.planting_cost == 1000
        assert result.total_cost == 1000 + 150 * 10
        assert result.factors["cost_per_m2"] == 10

    def test_zero_cost_uses_default(self):
        result = calculate_landscape(LandscapeInput(area_m2=100, plant_type="ShadeTree", cost_per_m2=0))
        assert result.planting_cost == 1750

    def test_equivalencies(self, shade_trees):
        eq = shade_trees.equivalencies
        assert eq.car_km_equivalent == 248
        assert eq.trees_equivalent == 4.6
        assert eq.people_o2_equivalent == 15.9

    def test_factors_echoed(self, lawn):
        assert lawn.factors["co2_factor_per_m2"] == 0.05
        assert lawn.factors["water_use_per_m2"] == 950
        assert lawn.plant_description

    def test_deterministic(self):
        inp = LandscapeInput(area_m2=250, plant_type="DesertPlants", water_source="TreatedWater")
        assert calculate_landscape(inp) == calculate_landscape(inp)


# ==================== SCORE ====================

class TestEnvironmentalScore:

    @pytest.mark.parametrize("plant,score,category", [
        ("ShadeTree", 79.4, "Excellent"),
        ("GrassTurf", 7.1, "Poor"),
        ("DesertPlants", 27.4, "Poor"),
        ("DecorativePlants", 24.0, "Poor"),
    ])
    def test_by_plant(self, plant, score, category):
        result = calculate_landscape(LandscapeInput(area_m2=100, plant_type=plant))
        assert result.env_score == score
        assert result.score_category == category

    def test_score_independent_of_area(self):
        small = calculate_landscape(LandscapeInput(area_m2=10, plant_type="ShadeTree"))
        large = calculate_landscape(LandscapeInput(area_m2=10_000, plant_type="ShadeTree"))
        assert small.env_score == large.env_score

    def test_components_clamped(self):
        assert environmental_score(1000, 10_000_000, 0, 1) == 100.0
        assert environmental_score(0, 0, 5000, 1) == 0.0

    @pytest.mark.parametrize("score,category", [
        (100, "Excellent"),
        (75, "Excellent"),
        (74.9, "Good"),
        (60, "Good"),
        (40, "Moderate"),
        (39.9, "Poor"),
        (0, "Poor"),
    ])
    def test_categories(self, score, category):
        assert score_category(score)[0] == category


# ==================== PROJECTION ====================

class TestYearlyProjection:

    def test_twenty_five_years(self, shade_trees):
        assert [y.year for y in shade_trees.yearly_data] == list(range(1, 26))

    def test_trees_grow_until_year_ten(self, shade_trees):
        years = shade_trees.yearly_data
        assert years[0].co2_reduction == 105.0
        assert years[9].co2_reduction == pytest.approx(years[0].co2_reduction * 1.05 ** 9, abs=0.1)
        assert years[9].co2_reduction == 162.9

    def test_trees_plateau_after_maturity(self, shade_trees):
        years = shade_trees.yearly_data
        assert all(y.co2_reduction == years[9].co2_reduction for y in years[10:])

    def test_other_plants_stay_flat(self, lawn):
        values = {y.co2_reduction for y in lawn.yearly_data}
        assert values == {5.0}
        assert lawn.yearly_data[-1].cumulative_co2 == pytest.approx(125.0)

    def test_water_use_constant(self, shade_trees):
        assert {y.water_use for y in shade_trees.yearly_data} == {24000}


# ==================== RECOMMENDATIONS ====================

class TestRecommendations:

    def test_drinking_water_and_thirsty_lawn(self, lawn):
        recs = lawn.recommendations
        assert recs[0].startswith("Consider switching to treated water")
        assert recs[1].startswith("Grass turf requires significant water")

    def test_lawn_below_threshold(self):
        result = calculate_landscape(LandscapeInput(area_m2=100, plant_type="GrassTurf",
                                                    water_source="TreatedWater"))
        assert not any(r.startswith("Grass turf") for r in result.recommendations)

    def test_shade_tree_spacing(self, shade_trees):
        assert shade_trees.recommendations[0].startswith("Space trees 5-8 meters apart")
        assert len(shade_trees.recommendations) == 3

    def test_desert_plants(self):
        recs = landscape_recommendations("DesertPlants", "Rainwater", 1000, 50)
        assert recs[0].startswith("Excellent choice for water conservation")

    def test_large_area(self):
        recs = landscape_recommendations("DecorativePlants", "Rainwater", 1000, 600)
        assert any("mixed planting" in r for r in recs)

    def test_general_tips_always_last(self):
        recs = landscape_recommendations("DecorativePlants", "TreatedWater", 1000, 10)
        assert recs[-2].startswith("Install soil moisture sensors")
        assert recs[-1].startswith("Apply organic mulch")
