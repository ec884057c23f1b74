"""Catalan habitability rule catalog

Each rule is a pure function (PropertyInput) -> RuleOutcome.
Rules read only the input, never raise for a well-typed input and return
UNKNOWN (confidence 0) when a measurement they depend on is missing or not
positive.

The membership, order and thresholds of RULES are versioned by
RULESET_VERSION. Any change here must bump the version and come with tests;
stored evaluations are only comparable within the same version.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from app.models.evaluation import RuleOutcome, RuleSeverity
from app.models.property import PropertyInput, UseCase

RULESET_VERSION = "2.0.0-catalonia"

RuleFunc = Callable[[PropertyInput], RuleOutcome]

# Thresholds
MIN_AREA_FIRST_OCCUPANCY = 30.0  # m²
MIN_AREA_DEFAULT = 36.0  # m², second occupancy / renovation / anything else
MIN_CEILING_HEIGHT = 2.5  # m
MIN_AREA_PER_PERSON = 9.0  # m²/person
MIN_ROOMS_FLOOR = 2  # bedroom + living area
MIN_SINGLE_SPACE_AREA = 8.0  # m², one-room dwelling
MIN_AVERAGE_ROOM_AREA = 6.0  # m²/room
MAX_FLOORS_WITHOUT_CHECKS = 1

# Confidence when a detailed-facility rule fails only because a flag was not stated
UNSTATED_FLAG_CONFIDENCE = 70


@dataclass(frozen=True)
class Rule:
    """Static habitability rule"""

    id: str
    name: str
    description: str
    evidence_needed: tuple[str, ...]
    evaluate: RuleFunc


def _num(value: float) -> str:
    """2.6 -> '2.6', 40.0 -> '40'"""
    return f"{value:g}"


def _positive(value: float | None) -> bool:
    return value is not None and value > 0


def _missing_flags(p: PropertyInput, labels: dict[str, str]) -> tuple[list[str], bool]:
    """Sub-facilities not confirmed as True.

    Returns (labels of missing ones, whether any of them was simply not stated).
    """
    missing = []
    unstated = False
    for wire_name, label in labels.items():
        value = p.get_field(wire_name)
        if value is True:
            continue
        missing.append(label)
        if value is None:
            unstated = True
    return missing, unstated


def _failure_confidence(unstated: bool) -> int:
    return UNSTATED_FLAG_CONFIDENCE if unstated else 100


# === Area and dimensions ===


def check_min_useful_area(p: PropertyInput) -> RuleOutcome:
    """Minimum useful area by use case (Decret 141/2012)"""
    if not _positive(p.useful_area):
        return RuleOutcome(
            severity=RuleSeverity.UNKNOWN,
            message="Superfície útil no proporcionada",
            explanation="Es necessita mesurar la superfície útil de l'habitatge per validar aquest requisit.",
            fix_guidance="Mesura la superfície útil (sense comptar parets, passadissos, etc.)",
            confidence=0,
        )

    if p.use_case == UseCase.FIRST_OCCUPANCY.value:
        minimum, use_name = MIN_AREA_FIRST_OCCUPANCY, "primera ocupació"
    elif p.use_case == UseCase.RENOVATION.value:
        minimum, use_name = MIN_AREA_DEFAULT, "renovació"
    else:
        minimum, use_name = MIN_AREA_DEFAULT, "segona ocupació"

    area = _num(p.useful_area)
    if p.useful_area >= minimum:
        return RuleOutcome(
            severity=RuleSeverity.PASS,
            message=f"Superfície útil adequada: {area} m²",
            explanation=(
                f"La superfície útil de {area} m² compleix el mínim de "
                f"{_num(minimum)} m² requerit per a {use_name}."
            ),
            confidence=100,
        )
    return RuleOutcome(
        severity=RuleSeverity.FAIL,
        message=f"Superfície útil insuficient: {area} m² (mínim: {_num(minimum)} m² per a {use_name})",
        explanation=(
            f"La superfície útil de {area} m² és inferior al mínim de "
            f"{_num(minimum)} m² requerit per a {use_name}."
        ),
        fix_guidance=(
            "No es pot solucionar sense modificar l'habitatge. Es requereix una "
            f"superfície mínima de {_num(minimum)} m² per a {use_name}."
        ),
        confidence=100,
    )


def check_min_ceiling_height(p: PropertyInput) -> RuleOutcome:
    if not _positive(p.ceiling_height):
        return RuleOutcome(
            severity=RuleSeverity.UNKNOWN,
            message="Alçada del sostre no proporcionada",
            explanation="Es necessita mesurar l'alçada del sostre per validar aquest requisit.",
            fix_guidance="Mesura l'alçada del sostre en el punt més baix de cada habitació.",
            confidence=0,
        )

    height = _num(p.ceiling_height)
    if p.ceiling_height >= MIN_CEILING_HEIGHT:
        return RuleOutcome(
            severity=RuleSeverity.PASS,
            message=f"Alçada adequada: {height} m",
            explanation=f"L'alçada de {height} m compleix el mínim de 2,5 m requerit.",
            confidence=100,
        )
    return RuleOutcome(
        severity=RuleSeverity.FAIL,
        message=f"Alçada insuficient: {height} m (mínim: 2,5 m)",
        explanation=f"L'alçada de {height} m és inferior al mínim de 2,5 m requerit.",
        fix_guidance="Pot ser necessari modificar el sostre o reduir l'alçada del terra si és possible.",
        confidence=100,
    )


# === Mandatory spaces ===


def check_kitchen_required(p: PropertyInput) -> RuleOutcome:
    if p.has_kitchen:
        return RuleOutcome(
            severity=RuleSeverity.PASS,
            message="Cuina present",
            explanation="L'habitatge té una cuina, complint el requisit.",
            confidence=100,
        )
    return RuleOutcome(
        severity=RuleSeverity.FAIL,
        message="Cuina no present",
        explanation="L'habitatge no té cuina, requisit obligatori per a la cèdula d'habitabilitat.",
        fix_guidance="S'ha d'instal·lar una cuina amb aigua corrent, fogó i desguàs.",
        confidence=100,
    )


def check_bathroom_required(p: PropertyInput) -> RuleOutcome:
    if p.has_bathroom:
        return RuleOutcome(
            severity=RuleSeverity.PASS,
            message="Bany present",
            explanation="L'habitatge té un bany, complint el requisit.",
            confidence=100,
        )
    return RuleOutcome(
        severity=RuleSeverity.FAIL,
        message="Bany no present",
        explanation="L'habitatge no té bany, requisit obligatori per a la cèdula d'habitabilitat.",
        fix_guidance="S'ha d'instal·lar un bany amb dutxa o banyera, vàter i aigua corrent.",
        confidence=100,
    )


# === Light, air and comfort (soft requirements, never FAIL) ===


def check_natural_light(p: PropertyInput) -> RuleOutcome:
    if p.has_natural_light:
        return RuleOutcome(
            severity=RuleSeverity.PASS,
            message="Il·luminació natural present",
            explanation="L'habitatge té il·luminació natural, complint el requisit.",
            confidence=80,
        )
    return RuleOutcome(
        severity=RuleSeverity.RISK,
        message="Il·luminació natural no confirmada",
        explanation=(
            "No s'ha confirmat la presència d'il·luminació natural. Això pot ser un "
            "problema per a les habitacions principals."
        ),
        fix_guidance=(
            "Verifica que les habitacions principals (dormitori, sala d'estar) tinguin "
            "finestres amb accés a llum natural."
        ),
        confidence=50,
    )


def check_ventilation(p: PropertyInput) -> RuleOutcome:
    if p.has_ventilation:
        return RuleOutcome(
            severity=RuleSeverity.PASS,
            message="Ventilació adequada",
            explanation="L'habitatge té ventilació adequada, complint el requisit.",
            confidence=80,
        )
    return RuleOutcome(
        severity=RuleSeverity.RISK,
        message="Ventilació no confirmada",
        explanation=(
            "No s'ha confirmat la presència de ventilació adequada. Això pot ser un "
            "problema per a la qualitat de l'aire."
        ),
        fix_guidance=(
            "Verifica que hi hagi ventilació natural (finestres) o mecànica (extractors) "
            "a la cuina i al bany."
        ),
        confidence=50,
    )


def check_heating(p: PropertyInput) -> RuleOutcome:
    if p.has_heating:
        return RuleOutcome(
            severity=RuleSeverity.PASS,
            message="Calefacció present",
            explanation="L'habitatge té calefacció, complint el requisit.",
            confidence=90,
        )
    return RuleOutcome(
        severity=RuleSeverity.RISK,
        message="Calefacció no confirmada",
        explanation=(
            "No s'ha confirmat la presència de calefacció. Això pot ser un problema "
            "per al confort."
        ),
        fix_guidance="Instal·la un sistema de calefacció adequat (elèctric, gas o altres sistemes aprovats).",
        confidence=60,
    )


# === Occupancy and room heuristics (independent approximations) ===


def check_occupancy_density(p: PropertyInput) -> RuleOutcome:
    if not (_positive(p.useful_area) and _positive(p.intended_occupancy)):
        return RuleOutcome(
            severity=RuleSeverity.UNKNOWN,
            message="Dades d'ocupació incompletes",
            explanation=(
                "Es necessita la superfície útil i el nombre d'ocupants per validar "
                "aquest requisit."
            ),
            fix_guidance="Proporciona la superfície útil i el nombre d'ocupants previstos.",
            confidence=0,
        )

    per_person = p.useful_area / p.intended_occupancy
    area = _num(p.useful_area)
    if per_person >= MIN_AREA_PER_PERSON:
        return RuleOutcome(
            severity=RuleSeverity.PASS,
            message=f"Densitat adequada: {per_person:.1f} m²/persona",
            explanation=(
                f"Amb {area} m² per a {p.intended_occupancy} persones, la densitat és adequada."
            ),
            confidence=90,
        )
    recommended = MIN_AREA_PER_PERSON * p.intended_occupancy
    return RuleOutcome(
        severity=RuleSeverity.RISK,
        message=f"Densitat alta: {per_person:.1f} m²/persona",
        explanation=(
            f"Amb {area} m² per a {p.intended_occupancy} persones, la densitat pot ser massa alta."
        ),
        fix_guidance=(
            "Considera reduir el nombre d'ocupants o augmentar la superfície útil. "
            f"Recomanació: mínim {recommended:.0f} m²."
        ),
        confidence=80,
    )


def check_minimum_rooms(p: PropertyInput) -> RuleOutcome:
    if not (_positive(p.num_rooms) and _positive(p.intended_occupancy)):
        return RuleOutcome(
            severity=RuleSeverity.UNKNOWN,
            message="Dades d'habitacions incompletes",
            explanation=(
                "Es necessita el nombre d'habitacions i d'ocupants per validar aquest requisit."
            ),
            confidence=0,
        )

    min_rooms = max(MIN_ROOMS_FLOOR, p.intended_occupancy)
    if p.num_rooms >= min_rooms:
        return RuleOutcome(
            severity=RuleSeverity.PASS,
            message=f"Nombre d'habitacions adequat: {p.num_rooms}",
            explanation=(
                f"Amb {p.num_rooms} habitacions per a {p.intended_occupancy} persones, "
                "el nombre és adequat."
            ),
            confidence=85,
        )
    return RuleOutcome(
        severity=RuleSeverity.RISK,
        message=f"Potser insuficients habitacions: {p.num_rooms} (recomanat: {min_rooms}+)",
        explanation=(
            f"Amb {p.num_rooms} habitacions per a {p.intended_occupancy} persones, "
            "pot ser insuficient."
        ),
        fix_guidance="Considera si l'habitatge té espai suficient per a tots els ocupants.",
        confidence=70,
    )


def check_minimum_room_size(p: PropertyInput) -> RuleOutcome:
    if not (_positive(p.useful_area) and _positive(p.num_rooms)):
        return RuleOutcome(
            severity=RuleSeverity.UNKNOWN,
            message="Dades de superfície per habitació incompletes",
            explanation=(
                "Es necessita la superfície útil i el nombre d'habitacions per validar "
                "la mida mínima de les estances."
            ),
            fix_guidance="Proporciona la superfície útil i el nombre d'habitacions.",
            confidence=0,
        )

    area = _num(p.useful_area)
    if p.num_rooms == 1:
        if p.useful_area >= MIN_SINGLE_SPACE_AREA:
            return RuleOutcome(
                severity=RuleSeverity.PASS,
                message=f"Espai únic adequat: {area} m²",
                explanation=(
                    f"L'espai únic de {area} m² compleix el mínim de 8 m² per a una estança."
                ),
                confidence=85,
            )
        return RuleOutcome(
            severity=RuleSeverity.FAIL,
            message=f"Espai únic massa petit: {area} m² (mínim: 8 m²)",
            explanation=(
                f"L'espai únic de {area} m² és inferior al mínim de 8 m² exigit per a una estança."
            ),
            fix_guidance="Cal ampliar l'espai fins a un mínim de 8 m² útils.",
            confidence=90,
        )

    average = p.useful_area / p.num_rooms
    if average >= MIN_AVERAGE_ROOM_AREA:
        return RuleOutcome(
            severity=RuleSeverity.PASS,
            message=f"Mida mitjana de les habitacions adequada: {average:.1f} m²",
            explanation=(
                f"Amb {area} m² repartits en {p.num_rooms} habitacions, la mitjana supera "
                "els 6 m² per habitació."
            ),
            confidence=85,
        )
    return RuleOutcome(
        severity=RuleSeverity.RISK,
        message=f"Habitacions potser massa petites: {average:.1f} m² de mitjana (mínim: 6 m²)",
        explanation=(
            f"Amb {area} m² repartits en {p.num_rooms} habitacions, la mitjana és inferior "
            "a 6 m² per habitació; alguna estança pot no complir la mida mínima."
        ),
        fix_guidance="Comprova la superfície de cada habitació; pot caldre unificar estances.",
        confidence=80,
    )


# === Detailed facilities ===

_KITCHEN_FACILITIES = {
    "hasRunningWater": "aigua corrent",
    "hasDrainage": "desguàs",
    "hasCookingAppliance": "fogó o cuina",
}

_BATHROOM_FACILITIES = {
    "hasWC": "vàter",
    "hasShowerOrBath": "dutxa o banyera",
    "hasRunningWater": "aigua corrent",
    "hasDrainage": "desguàs",
}

_WATER_FACILITIES = {
    "hasRunningWater": "aigua corrent",
    "hasHotWater": "aigua calenta",
}


def check_kitchen_details(p: PropertyInput) -> RuleOutcome:
    if not p.has_kitchen:
        # missing kitchen is reported by kitchen-required
        return RuleOutcome(
            severity=RuleSeverity.PASS,
            message="Sense cuina: no s'avaluen els equipaments",
            explanation="Aquest requisit només s'aplica si l'habitatge té cuina.",
            confidence=100,
        )

    missing, unstated = _missing_flags(p, _KITCHEN_FACILITIES)
    if not missing:
        return RuleOutcome(
            severity=RuleSeverity.PASS,
            message="Cuina completament equipada",
            explanation="La cuina disposa d'aigua corrent, desguàs i fogó.",
            confidence=95,
        )
    listed = ", ".join(missing)
    return RuleOutcome(
        severity=RuleSeverity.FAIL,
        message=f"Equipament de cuina incomplet: falta {listed}",
        explanation=(
            "La cuina ha de disposar d'aigua corrent, desguàs i fogó. "
            f"No s'ha confirmat: {listed}."
        ),
        fix_guidance=f"Instal·la a la cuina: {listed}.",
        confidence=_failure_confidence(unstated),
    )


def check_bathroom_details(p: PropertyInput) -> RuleOutcome:
    if not p.has_bathroom:
        # missing bathroom is reported by bathroom-required
        return RuleOutcome(
            severity=RuleSeverity.PASS,
            message="Sense bany: no s'avaluen els equipaments",
            explanation="Aquest requisit només s'aplica si l'habitatge té bany.",
            confidence=100,
        )

    missing, unstated = _missing_flags(p, _BATHROOM_FACILITIES)
    if not missing:
        return RuleOutcome(
            severity=RuleSeverity.PASS,
            message="Bany completament equipat",
            explanation="El bany disposa de vàter, dutxa o banyera, aigua corrent i desguàs.",
            confidence=95,
        )
    listed = ", ".join(missing)
    return RuleOutcome(
        severity=RuleSeverity.FAIL,
        message=f"Equipament de bany incomplet: falta {listed}",
        explanation=(
            "El bany ha de disposar de vàter, dutxa o banyera, aigua corrent i desguàs. "
            f"No s'ha confirmat: {listed}."
        ),
        fix_guidance=f"Instal·la al bany: {listed}.",
        confidence=_failure_confidence(unstated),
    )


def check_water_supply(p: PropertyInput) -> RuleOutcome:
    missing, unstated = _missing_flags(p, _WATER_FACILITIES)
    if not missing:
        return RuleOutcome(
            severity=RuleSeverity.PASS,
            message="Subministrament d'aigua correcte",
            explanation="L'habitatge disposa d'aigua corrent i aigua calenta.",
            confidence=95,
        )
    listed = ", ".join(missing)
    return RuleOutcome(
        severity=RuleSeverity.FAIL,
        message=f"Subministrament d'aigua incomplet: falta {listed}",
        explanation=(
            "L'habitatge ha de disposar d'aigua corrent potable i d'aigua calenta. "
            f"No s'ha confirmat: {listed}."
        ),
        fix_guidance=f"Garanteix el subministrament de: {listed}.",
        confidence=_failure_confidence(unstated),
    )


def check_drainage_system(p: PropertyInput) -> RuleOutcome:
    if p.has_drainage:
        return RuleOutcome(
            severity=RuleSeverity.PASS,
            message="Sistema de desguàs present",
            explanation="L'habitatge disposa de connexió a la xarxa de sanejament.",
            confidence=95,
        )
    return RuleOutcome(
        severity=RuleSeverity.FAIL,
        message="Sistema de desguàs no confirmat",
        explanation=(
            "L'habitatge ha d'estar connectat a la xarxa de sanejament o disposar d'un "
            "sistema d'evacuació d'aigües residuals."
        ),
        fix_guidance="Connecta l'habitatge a la xarxa de clavegueram o instal·la un sistema de desguàs homologat.",
        confidence=_failure_confidence(p.has_drainage is None),
    )


def check_electrical_installation(p: PropertyInput) -> RuleOutcome:
    if p.has_electrical_installation:
        return RuleOutcome(
            severity=RuleSeverity.PASS,
            message="Instal·lació elèctrica present",
            explanation="L'habitatge disposa d'instal·lació elèctrica.",
            confidence=95,
        )
    return RuleOutcome(
        severity=RuleSeverity.FAIL,
        message="Instal·lació elèctrica no confirmada",
        explanation="L'habitatge ha de disposar d'una instal·lació elèctrica que compleixi el reglament vigent.",
        fix_guidance="Cal una instal·lació elèctrica revisada per un instal·lador autoritzat (butlletí elèctric).",
        confidence=_failure_confidence(p.has_electrical_installation is None),
    )


def check_energy_certificate(p: PropertyInput) -> RuleOutcome:
    """Advisory only: never FAIL"""
    if p.has_energy_certificate:
        return RuleOutcome(
            severity=RuleSeverity.PASS,
            message="Certificat energètic disponible",
            explanation="L'habitatge disposa de certificat d'eficiència energètica.",
            confidence=100,
        )
    return RuleOutcome(
        severity=RuleSeverity.RISK,
        message="Certificat energètic no disponible",
        explanation=(
            "El certificat d'eficiència energètica és necessari per vendre o llogar "
            "l'habitatge i sovint es demana en la tramitació."
        ),
        fix_guidance="Encarrega el certificat energètic a un tècnic competent.",
        confidence=80,
    )


def check_access_circulation(p: PropertyInput) -> RuleOutcome:
    if not _positive(p.num_floors):
        return RuleOutcome(
            severity=RuleSeverity.UNKNOWN,
            message="Nombre de plantes no proporcionat",
            explanation="Es necessita el nombre de plantes per valorar l'accés i la circulació interior.",
            fix_guidance="Indica quantes plantes té l'habitatge.",
            confidence=0,
        )

    if p.num_floors <= MAX_FLOORS_WITHOUT_CHECKS:
        return RuleOutcome(
            severity=RuleSeverity.PASS,
            message="Habitatge d'una sola planta",
            explanation="Sense escales interiors, la circulació no presenta requisits addicionals.",
            confidence=90,
        )
    return RuleOutcome(
        severity=RuleSeverity.RISK,
        message=f"Habitatge de {p.num_floors} plantes: cal revisar l'accés",
        explanation=(
            "En habitatges de més d'una planta cal comprovar l'escala (amplada i alçada "
            "dels graons), l'amplada de les portes i dels passadissos."
        ),
        fix_guidance="Verifica l'amplada de l'escala, de les portes i dels passadissos segons la normativa.",
        confidence=70,
    )


def check_gas_installation(p: PropertyInput) -> RuleOutcome:
    if not p.has_gas:
        return RuleOutcome(
            severity=RuleSeverity.PASS,
            message="Sense subministrament de gas",
            explanation="Aquest requisit només s'aplica si l'habitatge té gas.",
            confidence=100,
        )
    if p.has_gas_installation:
        return RuleOutcome(
            severity=RuleSeverity.PASS,
            message="Instal·lació de gas certificada",
            explanation="L'habitatge té gas amb una instal·lació certificada.",
            confidence=90,
        )
    return RuleOutcome(
        severity=RuleSeverity.FAIL,
        message="Instal·lació de gas no certificada",
        explanation="L'habitatge té gas però no s'ha confirmat el certificat de la instal·lació.",
        fix_guidance="Cal el certificat d'instal·lació de gas emès per un instal·lador autoritzat.",
        confidence=90,
    )


# Catalog (order is part of the versioned contract)
RULES: tuple[Rule, ...] = (
    Rule(
        id="min-useful-area",
        name="Superfície útil mínima",
        description="La superfície útil mínima varia segons el tipus d'ocupació",
        evidence_needed=("usefulArea", "useCase"),
        evaluate=check_min_useful_area,
    ),
    Rule(
        id="min-ceiling-height",
        name="Alçada mínima del sostre",
        description="L'alçada mínima del sostre ha de ser de 2,5 metres",
        evidence_needed=("ceilingHeight",),
        evaluate=check_min_ceiling_height,
    ),
    Rule(
        id="kitchen-required",
        name="Cuina obligatòria",
        description="L'habitatge ha de tenir una cuina",
        evidence_needed=("hasKitchen",),
        evaluate=check_kitchen_required,
    ),
    Rule(
        id="bathroom-required",
        name="Bany obligatori",
        description="L'habitatge ha de tenir un bany",
        evidence_needed=("hasBathroom",),
        evaluate=check_bathroom_required,
    ),
    Rule(
        id="natural-light",
        name="Il·luminació natural",
        description="L'habitatge ha de tenir il·luminació natural a les habitacions principals",
        evidence_needed=("hasNaturalLight",),
        evaluate=check_natural_light,
    ),
    Rule(
        id="ventilation",
        name="Ventilació",
        description="L'habitatge ha de tenir ventilació adequada",
        evidence_needed=("hasVentilation",),
        evaluate=check_ventilation,
    ),
    Rule(
        id="occupancy-density",
        name="Densitat d'ocupació",
        description="La superfície útil per persona ha de ser adequada",
        evidence_needed=("usefulArea", "intendedOccupancy"),
        evaluate=check_occupancy_density,
    ),
    Rule(
        id="minimum-rooms",
        name="Nombre mínim d'habitacions",
        description="L'habitatge ha de tenir un nombre adequat d'habitacions",
        evidence_needed=("numRooms", "intendedOccupancy"),
        evaluate=check_minimum_rooms,
    ),
    Rule(
        id="minimum-room-size",
        name="Mida mínima de les estances",
        description="Les habitacions han de tenir una superfície mínima",
        evidence_needed=("usefulArea", "numRooms"),
        evaluate=check_minimum_room_size,
    ),
    Rule(
        id="heating",
        name="Calefacció",
        description="L'habitatge ha de tenir un sistema de calefacció adequat",
        evidence_needed=("hasHeating",),
        evaluate=check_heating,
    ),
    Rule(
        id="kitchen-details",
        name="Equipament de la cuina",
        description="La cuina ha de tenir aigua corrent, desguàs i fogó",
        evidence_needed=("hasKitchen", "hasRunningWater", "hasDrainage", "hasCookingAppliance"),
        evaluate=check_kitchen_details,
    ),
    Rule(
        id="bathroom-details",
        name="Equipament del bany",
        description="El bany ha de tenir vàter, dutxa o banyera, aigua corrent i desguàs",
        evidence_needed=("hasBathroom", "hasWC", "hasShowerOrBath", "hasRunningWater", "hasDrainage"),
        evaluate=check_bathroom_details,
    ),
    Rule(
        id="water-supply",
        name="Subministrament d'aigua",
        description="L'habitatge ha de tenir aigua corrent i aigua calenta",
        evidence_needed=("hasRunningWater", "hasHotWater"),
        evaluate=check_water_supply,
    ),
    Rule(
        id="drainage-system",
        name="Sistema de desguàs",
        description="L'habitatge ha d'estar connectat a la xarxa de sanejament",
        evidence_needed=("hasDrainage",),
        evaluate=check_drainage_system,
    ),
    Rule(
        id="electrical-installation",
        name="Instal·lació elèctrica",
        description="L'habitatge ha de tenir instal·lació elèctrica",
        evidence_needed=("hasElectricalInstallation",),
        evaluate=check_electrical_installation,
    ),
    Rule(
        id="energy-certificate",
        name="Certificat energètic",
        description="Es recomana disposar del certificat d'eficiència energètica",
        evidence_needed=("hasEnergyCertificate",),
        evaluate=check_energy_certificate,
    ),
    Rule(
        id="access-circulation",
        name="Accés i circulació",
        description="Escales, portes i passadissos han de permetre una circulació adequada",
        evidence_needed=("numFloors",),
        evaluate=check_access_circulation,
    ),
    Rule(
        id="gas-installation",
        name="Instal·lació de gas",
        description="Si hi ha gas, la instal·lació ha d'estar certificada",
        evidence_needed=("hasGas", "hasGasInstallation"),
        evaluate=check_gas_installation,
    ),
)

RULES_BY_ID: dict[str, Rule] = {rule.id: rule for rule in RULES}
