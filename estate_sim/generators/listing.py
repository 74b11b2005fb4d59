"""Market listing generator."""

from __future__ import annotations

from dataclasses import dataclass, replace

from estate_sim.config import SimulationConfig
from estate_sim.engine.rent import default_rent_terms, find_rent_plan
from estate_sim.engine.valuation import (
    adjusted_value,
    calculate_base_value,
    clamp_maintenance_percent,
)
from estate_sim.generators.base import (
    BaseGenerator,
    RandomFn,
    pick_random,
    random_int,
    random_number,
    select_subset,
)
from estate_sim.models import ListingDefinition, Location, PropertyRecord, PropertyType, Tenant


@dataclass(frozen=True)
class Archetype:
    """Template for procedurally generated listings."""

    key: str
    property_type: PropertyType
    names: tuple[str, ...]
    descriptions: tuple[str, ...]
    location_descriptors: tuple[str, ...]
    bedrooms_range: tuple[int, int]
    bathrooms_range: tuple[int, int]
    demand_range: tuple[int, int]
    proximity_range: tuple[float, float]
    school_range: tuple[int, int]
    crime_range: tuple[int, int]
    features_pool: tuple[str, ...]
    maintenance_range: tuple[int, int] | None = None


class ListingGenerator(BaseGenerator):
    """Generate market listings from archetypes and the opening catalogue."""

    ARCHETYPES = (
        Archetype(
            key="urban_loft",
            property_type=PropertyType.APARTMENT,
            names=(
                "Canal View Loft",
                "Warehouse Loft Residence",
                "Transit Hub Micro Suite",
                "Riverside Skyline Flat",
            ),
            descriptions=(
                "Open-concept loft with exposed beams and industrial chic finishes.",
                "Bright studio with soaring ceilings and premium smart-home upgrades.",
                "Compact layout designed for efficient city living and quick commutes.",
            ),
            location_descriptors=(
                "Converted warehouse district steps from artisanal cafes.",
                "Walkable neighbourhood beside major transit lines.",
                "Revitalised riverfront promenade with co-working hubs.",
            ),
            bedrooms_range=(1, 2),
            bathrooms_range=(1, 2),
            demand_range=(6, 9),
            proximity_range=(0.7, 0.96),
            school_range=(4, 7),
            crime_range=(3, 5),
            features_pool=("City View", "Shared Rooftop", "In-Unit Laundry", "Smart Thermostat", "Home Office"),
            maintenance_range=(70, 95),
        ),
        Archetype(
            key="family_suburb",
            property_type=PropertyType.SINGLE_FAMILY,
            names=(
                "Meadowridge Colonial",
                "Lakeside Craftsman Retreat",
                "Willow Grove Residence",
                "Sunset Ridge Family Estate",
            ),
            descriptions=(
                "Spacious home with flexible floor plan tailored for growing families.",
                "Expansive backyard and updated chef's kitchen with breakfast nook.",
                "Light-filled interiors with formal dining and bonus recreation room.",
            ),
            location_descriptors=(
                "Quiet cul-de-sac with playgrounds and community pool.",
                "Top-rated school catchment with weekly farmer's market.",
                "Lake-adjacent suburb boasting hiking paths and tennis courts.",
            ),
            bedrooms_range=(3, 5),
            bathrooms_range=(2, 4),
            demand_range=(5, 8),
            proximity_range=(0.5, 0.75),
            school_range=(7, 10),
            crime_range=(1, 3),
            features_pool=("Two-Car Garage", "Backyard Deck", "Home Office", "Finished Basement", "Smart Thermostat"),
            maintenance_range=(70, 95),
        ),
        Archetype(
            key="luxury_highrise",
            property_type=PropertyType.LUXURY,
            names=(
                "Aurora Sky Penthouse",
                "Summit View Grand Suite",
                "Crown Heights Signature Residence",
                "Helios Tower Panorama",
            ),
            descriptions=(
                "Designer-curated interiors with private concierge and spa privileges.",
                "Panoramic skyline vistas paired with bespoke finishes throughout.",
                "Ultra-premium sky home with wine cellar and home automation package.",
            ),
            location_descriptors=(
                "Iconic tower above luxury retail promenade and fine dining.",
                "Flagship high-rise neighbouring cultural and financial districts.",
                "Prestigious address with private club access and valet services.",
            ),
            bedrooms_range=(2, 4),
            bathrooms_range=(2, 4),
            demand_range=(8, 10),
            proximity_range=(0.9, 0.99),
            school_range=(6, 9),
            crime_range=(1, 3),
            features_pool=(
                "Private Elevator",
                "Wraparound Terrace",
                "Floor-to-Ceiling Windows",
                "Concierge Service",
                "Smart Thermostat",
            ),
            maintenance_range=(60, 90),
        ),
        Archetype(
            key="urban_townhome",
            property_type=PropertyType.TOWNHOUSE,
            names=(
                "Cobblestone Row Townhome",
                "Maple Terrace Brownstone",
                "Gallery District Duplex",
                "Heritage Row Garden Home",
            ),
            descriptions=(
                "Updated interiors blend classic masonry with modern conveniences.",
                "Multi-level plan with flexible workspace and rooftop garden.",
                "Sun-drenched living areas with custom millwork and smart lighting.",
            ),
            location_descriptors=(
                "Historic street close to bistros and boutique galleries.",
                "Transit-friendly district lined with artisan markets.",
                "Corner row with private courtyard and neighbourhood cafés.",
            ),
            bedrooms_range=(2, 4),
            bathrooms_range=(2, 3),
            demand_range=(6, 9),
            proximity_range=(0.65, 0.85),
            school_range=(6, 9),
            crime_range=(2, 4),
            features_pool=("Private Patio", "Finished Basement", "Smart Thermostat", "In-Unit Laundry", "Home Office"),
            maintenance_range=(65, 90),
        ),
    )

    DEFAULT_LISTINGS = (
        ListingDefinition(
            property_id="studio",
            name="Downtown Micro Loft",
            description="Compact living in the heart of the city, perfect for commuters.",
            property_type=PropertyType.APARTMENT,
            bedrooms=1,
            bathrooms=1,
            features=("City View", "Shared Rooftop", "In-Unit Laundry"),
            location_descriptor="Transit-rich downtown block with nightlife and offices steps away.",
            demand_score=9,
            location=Location(proximity=0.95, school_rating=5, crime_score=4),
        ),
        ListingDefinition(
            property_id="townhouse",
            name="Historic Row Townhouse",
            description="Updated interiors with charming brick facade and private entry.",
            property_type=PropertyType.TOWNHOUSE,
            bedrooms=3,
            bathrooms=2,
            features=("Private Patio", "Finished Basement", "Smart Thermostat"),
            location_descriptor="Tree-lined heritage street close to cafes and boutique shops.",
            demand_score=7,
            location=Location(proximity=0.75, school_rating=7, crime_score=3),
        ),
        ListingDefinition(
            property_id="suburb",
            name="Suburban Cul-de-sac Home",
            description="Spacious single-family house in a top-rated school district.",
            property_type=PropertyType.SINGLE_FAMILY,
            bedrooms=4,
            bathrooms=3,
            features=("Two-Car Garage", "Backyard Deck", "Home Office"),
            location_descriptor="Family-friendly cul-de-sac with parks and community amenities.",
            demand_score=6,
            location=Location(proximity=0.6, school_rating=9, crime_score=2),
        ),
        ListingDefinition(
            property_id="penthouse",
            name="Skyline Signature Penthouse",
            description="Expansive luxury residence with concierge and spa access.",
            property_type=PropertyType.LUXURY,
            bedrooms=3,
            bathrooms=3,
            features=("Private Elevator", "Wraparound Terrace", "Floor-to-Ceiling Windows", "Concierge Service"),
            location_descriptor="Top-floor suite in a premier downtown landmark tower.",
            demand_score=10,
            location=Location(proximity=0.98, school_rating=8, crime_score=2),
        ),
    )

    def __init__(self, config: SimulationConfig | None = None, seed: int | None = None) -> None:
        super().__init__(seed)
        self.config = config or SimulationConfig()

    def build_property(self, definition: ListingDefinition, day: int) -> PropertyRecord:
        """Value a definition and turn it into a fresh listing."""
        percent = definition.maintenance_percent
        if percent is None:
            percent = self.config.maintenance.default_percent
        percent = clamp_maintenance_percent(percent)
        base_value = calculate_base_value(definition)
        return PropertyRecord(
            property_id=definition.property_id,
            name=definition.name,
            description=definition.description,
            property_type=definition.property_type,
            bedrooms=definition.bedrooms,
            bathrooms=definition.bathrooms,
            features=tuple(definition.features),
            location_descriptor=definition.location_descriptor,
            demand_score=definition.demand_score,
            location=definition.location,
            base_value=base_value,
            maintenance_percent=percent,
            cost=adjusted_value(base_value, percent),
            rent_terms=default_rent_terms(self.config),
            introduced_on_day=day,
        )

    def initial_market(self, day: int) -> list[PropertyRecord]:
        """Opening listings."""
        return [self.build_property(definition, day) for definition in self.DEFAULT_LISTINGS]

    def generate(self, day: int, central_bank_rate: float, rand: RandomFn) -> PropertyRecord:
        """Generate one procedural listing.

        Parameters
        ----------
        day : int
            Day the listing enters the market.
        central_bank_rate : float
            Base rate used to price an inherited tenant's rent.
        rand : RandomFn
            Randomness source for every attribute draw.

        Returns
        -------
        PropertyRecord
            Listing, possibly with a sitting tenant.
        """
        archetype = pick_random(rand, self.ARCHETYPES)
        maintenance_range = archetype.maintenance_range or self.config.maintenance.initial_percent_range
        definition = ListingDefinition(
            property_id=f"proc-{self.fake.uuid4()}",
            name=pick_random(rand, archetype.names),
            description=pick_random(rand, archetype.descriptions),
            property_type=archetype.property_type,
            bedrooms=random_int(rand, *archetype.bedrooms_range),
            bathrooms=random_int(rand, *archetype.bathrooms_range),
            features=select_subset(rand, archetype.features_pool, 2, 4),
            location_descriptor=pick_random(rand, archetype.location_descriptors),
            demand_score=random_int(rand, *archetype.demand_range),
            location=Location(
                proximity=random_number(rand, *archetype.proximity_range),
                school_rating=random_int(rand, *archetype.school_range),
                crime_score=random_int(rand, *archetype.crime_range),
            ),
            maintenance_percent=random_int(rand, *maintenance_range),
        )
        listing = self.build_property(definition, day)
        return self._with_occupancy(listing, central_bank_rate, rand)

    def generate_batch(self, count: int, day: int, central_bank_rate: float, rand: RandomFn) -> list[PropertyRecord]:
        return [self.generate(day, central_bank_rate, rand) for _ in range(count)]

    def _with_occupancy(self, listing: PropertyRecord, central_bank_rate: float, rand: RandomFn) -> PropertyRecord:
        """Seat an inherited tenant or give the listing some vacancy history."""
        tenant_chance = min(max(0.25 + listing.demand_score / 10 * 0.35, 0.0), 0.75)
        if rand() < tenant_chance:
            plan = find_rent_plan(listing, listing.rent_terms, central_bank_rate, self.config)
            lease = random_int(rand, max(plan.lease_months - 3, 6), plan.lease_months + 6)
            return replace(listing, tenant=Tenant(monthly_rent=plan.monthly_rent, lease_months_remaining=lease))
        return replace(listing, vacancy_months=random_int(rand, 0, 2))
