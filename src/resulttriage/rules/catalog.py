"""Panel rule catalog: which lab values get flagged, and how badly.

Pure data: panel name -> PanelRules (field rules plus combination rules).
The evaluator in ``resulttriage.rules.evaluator`` is the only consumer.

Rule kinds:
- ThresholdRule: numeric (or titer) bands, top-down, first match wins.
  Bands run from most to least severe and use strict comparators unless a
  band states otherwise.
- CategoricalRule: case-insensitive token match against the raw value.
  ``normal`` tokens are checked first and suppress any finding.
- MarkerGradeRule: semi-quantitative '+' grading (dipstick style).
- MaxOfFieldsRule / AllOfRule: combination rules spanning several fields of
  the same panel, evaluated after the field rules.

Panel and field names are the ones the clinic's lab entry forms produce.
Field aliases ("WBC Count" / "WBC") are listed as separate fields.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Union

from resulttriage.models import Severity

CATALOG_VERSION = "2025.2"

C = Severity.CRITICAL
A = Severity.ABNORMAL

COMPARATORS = ("<", "<=", ">", ">=")


@dataclass(frozen=True)
class Band:
    """One threshold band: ``value <comparator> bound`` -> severity."""

    comparator: str
    bound: float
    severity: Severity
    message: str  # may reference {value} and {field}


@dataclass(frozen=True)
class Outcome:
    severity: Severity
    message: str


@dataclass(frozen=True)
class Token:
    """A token that, when found in the value, yields a finding."""

    text: str
    severity: Severity
    message: str


@dataclass(frozen=True)
class ThresholdRule:
    bands: tuple[Band, ...]
    value_format: str = "numeric"  # numeric | titer
    reference: str = ""
    unit: str = ""


@dataclass(frozen=True)
class CategoricalRule:
    tokens: tuple[Token, ...]
    normal: tuple[str, ...] = ()
    otherwise: Outcome | None = None  # any other non-empty value
    match: str = "substring"  # substring | exact
    reference: str = ""
    unit: str = ""


@dataclass(frozen=True)
class MarkerGradeRule:
    """grades[i] applies to i+1 markers; larger counts use the last grade."""

    grades: tuple[Outcome, ...]
    reference: str = "Negative"
    unit: str = ""
    trace: Outcome | None = None  # applies to a "Trace" result with no markers


@dataclass(frozen=True)
class MaxOfFieldsRule:
    """Bands applied to the largest parsed value among ``fields``."""

    label: str
    fields: tuple[str, ...]
    bands: tuple[Band, ...]
    value_format: str = "numeric"


@dataclass(frozen=True)
class Condition:
    field: str
    tokens: tuple[str, ...]  # any token (substring, case-insensitive) satisfies


@dataclass(frozen=True)
class AllOfRule:
    """A finding when every condition holds on the same panel."""

    label: str
    conditions: tuple[Condition, ...]
    outcome: Outcome


FieldRule = Union[ThresholdRule, CategoricalRule, MarkerGradeRule]
CombinationRule = Union[MaxOfFieldsRule, AllOfRule]


@dataclass(frozen=True)
class PanelRules:
    fields: Mapping[str, FieldRule]
    combinations: tuple[CombinationRule, ...] = ()


# Values that always read as "nothing found", checked before any token.
NEGATIVE_TOKENS = (
    "negative",
    "non-reactive",
    "non reactive",
    "nonreactive",
    "not seen",
    "not detected",
    "none",
    "nil",
    "absent",
)

# Microscopy counts per high-power field that are within normal limits.
NORMAL_HPF_COUNTS = (
    "0", "0-1", "0-2", "0-3", "0-4", "0-5", "1-2", "1-3", "2-3", "2-4", "3-5",
    "nil", "none", "negative", "not seen", "occasional", "rare",
)


def _bands(*specs) -> tuple[Band, ...]:
    return tuple(Band(cmp, float(bound), sev, msg) for cmp, bound, sev, msg in specs)


def _positive(severity: Severity, message: str, *extra: str) -> CategoricalRule:
    """Qualitative screening test: Positive / Reactive (plus extras) flag."""
    words = ("positive", "reactive") + extra
    return CategoricalRule(
        tokens=tuple(Token(w, severity, message) for w in words),
        normal=NEGATIVE_TOKENS,
        reference="Negative",
    )


def _panel(fields: dict, combinations: tuple = ()) -> PanelRules:
    return PanelRules(fields=MappingProxyType(dict(fields)), combinations=combinations)


_HEMOGLOBIN = ThresholdRule(
    bands=_bands(
        ("<", 6.0, C, "Hb {value} g/dL: life-threatening anemia, urgent transfusion consideration"),
        ("<", 8.0, C, "Hb {value} g/dL: severe anemia, urgent review required"),
        ("<", 10.0, A, "Hb {value} g/dL: moderate anemia, treatment indicated"),
        ("<", 12.0, A, "Hb {value} g/dL: mild anemia"),
    ),
    reference="12-16",
    unit="g/dL",
)

_WBC = ThresholdRule(
    bands=_bands(
        ("<", 2.0, C, "WBC {value} x10³/µL: severe leukopenia, high infection risk"),
        (">", 20.0, C, "WBC {value} x10³/µL: marked leukocytosis, rule out sepsis or leukemia"),
        ("<", 4.0, A, "WBC {value} x10³/µL: leukopenia, needs evaluation"),
        (">", 11.0, A, "WBC {value} x10³/µL: leukocytosis, possible infection"),
    ),
    reference="4.0-11.0",
    unit="x10³/µL",
)

_PLATELETS = ThresholdRule(
    bands=_bands(
        ("<", 50.0, C, "Platelets {value} x10³/µL: severe thrombocytopenia, bleeding risk"),
        ("<", 150.0, A, "Platelets {value} x10³/µL: thrombocytopenia, monitor for bleeding"),
        (">", 450.0, A, "Platelets {value} x10³/µL: thrombocytosis"),
    ),
    reference="150-450",
    unit="x10³/µL",
)

_GLUCOSE_RANDOM = ThresholdRule(
    bands=_bands(
        ("<", 50.0, C, "Glucose {value} mg/dL: severe hypoglycemia, give glucose immediately"),
        (">", 400.0, C, "Glucose {value} mg/dL: critical hyperglycemia, check ketones"),
        ("<", 70.0, C, "Glucose {value} mg/dL: hypoglycemia, investigate cause"),
        (">", 200.0, A, "Glucose {value} mg/dL: elevated random glucose, confirmatory fasting test recommended"),
    ),
    reference="<200",
    unit="mg/dL",
)

_GLUCOSE_FASTING = ThresholdRule(
    bands=_bands(
        ("<", 50.0, C, "Fasting glucose {value} mg/dL: severe hypoglycemia"),
        (">", 400.0, C, "Fasting glucose {value} mg/dL: critical hyperglycemia, check ketones"),
        ("<", 70.0, C, "Fasting glucose {value} mg/dL: fasting hypoglycemia"),
        (">=", 126.0, A, "Fasting glucose {value} mg/dL: meets diabetes criteria"),
        (">=", 100.0, A, "Fasting glucose {value} mg/dL: impaired fasting glucose"),
    ),
    reference="70-110",
    unit="mg/dL",
)

_TRANSAMINASE = ThresholdRule(
    bands=_bands(
        (">", 200.0, C, "{field} {value} U/L: severely elevated, significant liver injury"),
        (">", 100.0, A, "{field} {value} U/L: elevated, liver function impaired"),
    ),
    unit="U/L",
)

_MALARIA_POSITIVE = "Malaria parasites seen ({value}): requires immediate treatment"

_PROTEINURIA = MarkerGradeRule(
    grades=(
        Outcome(A, "Protein {value}: mild proteinuria, assess kidney function"),
        Outcome(A, "Protein {value}: moderate proteinuria, assess kidney function"),
        Outcome(C, "Protein {value}: severe proteinuria, urgent renal evaluation"),
    ),
    trace=Outcome(A, "Protein {value}: trace proteinuria, repeat test and assess kidney function"),
)

_GLUCOSURIA = MarkerGradeRule(
    grades=(Outcome(A, "Urine glucose {value}: glucosuria, check blood glucose"),),
)

_LEUCOCYTES = MarkerGradeRule(
    grades=(Outcome(A, "Leucocytes {value}: possible urinary tract infection"),),
)

_PYURIA = CategoricalRule(
    tokens=(),
    normal=NORMAL_HPF_COUNTS,
    otherwise=Outcome(A, "Pus cells {value}/HPF: pyuria, consider urine culture"),
    match="exact",
    reference="0-5",
    unit="/HPF",
)

_HEMATURIA = CategoricalRule(
    tokens=(),
    normal=NORMAL_HPF_COUNTS,
    otherwise=Outcome(A, "Red cells {value}/HPF: hematuria, further workup needed"),
    match="exact",
    reference="0-2",
    unit="/HPF",
)

_STOOL_FIELDS = {
    "Appearance": CategoricalRule(
        tokens=(
            Token("bloody", C, "Bloody stool: rule out dysentery or GI bleeding"),
            Token("tarry", C, "Tarry stool: possible upper GI bleeding"),
            Token("mucoid", A, "Mucoid stool: consider IBD or infection"),
            Token("watery", A, "Watery stool: assess hydration"),
            Token("pale", A, "Pale stool: possible biliary obstruction"),
        ),
        reference="Formed",
    ),
    "Consistency": CategoricalRule(
        tokens=(
            Token("watery", A, "Watery stool: assess for acute gastroenteritis"),
            Token("loose", A, "Loose stool: assess for diarrhoea and hydration"),
            Token("hard", A, "Hard stool: consider constipation"),
        ),
        reference="Formed",
    ),
    "Color": CategoricalRule(
        tokens=(
            Token("red", C, "Stool color {value}: urgent evaluation for active GI bleeding"),
            Token("black", C, "Stool color {value}: urgent evaluation for active GI bleeding"),
            Token("clay", A, "Clay-colored stool: possible biliary obstruction"),
            Token("pale", A, "Pale stool: possible biliary obstruction"),
            Token("green", A, "Green stool: rapid transit or infection, correlate clinically"),
        ),
        reference="Brown",
    ),
    "Ova/Parasites": CategoricalRule(
        tokens=(),
        normal=NEGATIVE_TOKENS,
        otherwise=Outcome(A, "Intestinal parasites detected ({value}): treatment indicated"),
        reference="None seen",
    ),
    "Occult Blood": _positive(A, "Occult blood positive: evaluate for GI bleeding"),
}

_TITER_BANDS_TYPHOID = _bands(
    (">=", 320, C, "Typhoid titer {value}: very high, strongly suggests active typhoid"),
    (">=", 160, A, "Typhoid titer {value}: high, probable typhoid fever"),
    (">=", 80, A, "Typhoid titer {value}: elevated, consider typhoid fever"),
)

_PARATYPHOID = ThresholdRule(
    bands=_bands((">=", 160, A, "{field} titer {value}: elevated, consider paratyphoid fever")),
    value_format="titer",
    reference="<1:80",
)


PANEL_CATALOG: Mapping[str, PanelRules] = MappingProxyType({
    "Complete Blood Count (CBC)": _panel({
        "Hemoglobin": _HEMOGLOBIN,
        "WBC Count": _WBC,
        "WBC": _WBC,
        "Platelets": _PLATELETS,
        "Hematocrit": ThresholdRule(
            bands=_bands(
                ("<", 20.0, C, "Hematocrit {value}%: critically low"),
                ("<", 37.0, A, "Hematocrit {value}%: low"),
                (">", 55.0, A, "Hematocrit {value}%: high, consider polycythemia"),
            ),
            reference="37-47",
            unit="%",
        ),
    }),
    "Hemoglobin (HB)": _panel({
        "Hemoglobin Level": _HEMOGLOBIN,
        "Hemoglobin": _HEMOGLOBIN,
    }),
    "Total White Blood Count (TWBC)": _panel({
        "WBC": _WBC,
    }),
    "Blood Film for Malaria (BFFM)": _panel({
        "Malaria Parasites": CategoricalRule(
            tokens=tuple(
                Token(w, C, _MALARIA_POSITIVE)
                for w in ("falciparum", "vivax", "malariae", "ovale", "mixed", "seen", "positive")
            ),
            normal=NEGATIVE_TOKENS,
            reference="Not seen",
        ),
        "Parasitemia": MarkerGradeRule(
            grades=(
                Outcome(A, "Parasitemia {value}: low parasite density"),
                Outcome(A, "Parasitemia {value}: moderate parasite density"),
                Outcome(C, "Parasitemia {value}: high parasite density, assess for severe malaria"),
            ),
            reference="None",
        ),
        "Gametocytes": CategoricalRule(
            tokens=(Token("seen", A, "Gametocytes present: patient is infectious"),),
            normal=NEGATIVE_TOKENS,
            reference="Not seen",
        ),
    }),
    "Widal Test (Typhoid)": _panel(
        {
            "S. Paratyphi A": _PARATYPHOID,
            "S. Paratyphi B": _PARATYPHOID,
        },
        combinations=(
            MaxOfFieldsRule(
                label="S. Typhi (O/H)Ag",
                fields=("S. Typhi (O)Ag", "S. Typhi (H)Ag"),
                bands=_TITER_BANDS_TYPHOID,
                value_format="titer",
            ),
        ),
    ),
    "Brucella Test (B.A.T)": _panel(
        {},
        combinations=(
            MaxOfFieldsRule(
                label="Brucella titer",
                fields=("B. Abortus", "B. Malitensis"),
                bands=_bands(
                    (">=", 160, C, "Brucella titer {value}: positive for brucellosis"),
                    (">=", 80, A, "Brucella titer {value}: possible brucellosis, correlate clinically"),
                ),
                value_format="titer",
            ),
        ),
    ),
    "VDRL Test (Syphilis)": _panel({
        "VDRL Result": _positive(C, "VDRL reactive: confirmatory syphilis testing required"),
        "VDRL": _positive(C, "VDRL reactive: confirmatory syphilis testing required"),
    }),
    "Hepatitis B Test (HBsAg)": _panel({
        "HBsAg Result": _positive(C, "HBsAg positive: patient is infectious"),
        "HBsAg": _positive(C, "HBsAg positive: patient is infectious"),
    }),
    "Hepatitis C Test (HCV)": _panel({
        "HCV Antibody": _positive(C, "HCV antibody positive: confirmatory HCV RNA testing recommended"),
    }),
    "HIV Test": _panel({
        "HIV Antibody": _positive(C, "HIV antibody positive: confirmatory testing and counseling required"),
    }),
    "H. Pylori Test": _panel({
        "H. Pylori Antigen": _positive(A, "H. pylori positive: active infection, treatment indicated"),
    }),
    "Urine Analysis": _panel({
        "Appearance": CategoricalRule(
            tokens=(
                Token("bloody", C, "Bloody urine: possible bleeding, trauma or severe infection"),
                Token("red", C, "Red urine: possible hematuria"),
                Token("turbid", A, "Turbid urine: possible infection"),
                Token("cloudy", A, "Cloudy urine: possible infection"),
            ),
            reference="Clear",
        ),
        "Protein": _PROTEINURIA,
        "Glucose": _GLUCOSURIA,
        "Nitrite": _positive(A, "Nitrite positive: suggests bacterial urinary tract infection"),
        "Leucocytes": _LEUCOCYTES,
        "Acetone": _positive(A, "Urine acetone positive: ketonuria, check for diabetic ketoacidosis or starvation"),
        "Hb pigment": _positive(A, "Urine Hb pigment positive: hemoglobinuria or hematuria, further workup needed"),
        "Bilirubin": _positive(A, "Urine bilirubin positive: possible liver disease or biliary obstruction"),
    }),
    "Urine Microscopy": _panel({
        "Pus Cells": _PYURIA,
        "WBC/HPF": _PYURIA,
        "Red Cells": _HEMATURIA,
        "RBC/HPF": _HEMATURIA,
        "Bacteria": CategoricalRule(
            tokens=(
                Token("many", A, "Bacteriuria ({value}): consider urine culture"),
                Token("plenty", A, "Bacteriuria ({value}): consider urine culture"),
                Token("positive", A, "Bacteriuria ({value}): consider urine culture"),
                Token("+", A, "Bacteriuria ({value}): consider urine culture"),
            ),
            normal=NEGATIVE_TOKENS,
            reference="None",
        ),
        "Casts": CategoricalRule(
            tokens=(),
            normal=NEGATIVE_TOKENS,
            otherwise=Outcome(A, "Urinary casts present ({value}): suggests renal parenchymal disease"),
            reference="None",
        ),
        "Yeast Cells": CategoricalRule(
            tokens=(Token("seen", A, "Yeast cells seen: possible candiduria"),),
            normal=NEGATIVE_TOKENS,
            reference="Not seen",
        ),
        "Trichomonas": CategoricalRule(
            tokens=(Token("seen", A, "Trichomonas seen: treatment indicated"),),
            normal=NEGATIVE_TOKENS,
            reference="Not seen",
        ),
    }),
    "Stool Examination": _panel(_STOOL_FIELDS),
    "Liver Function Test (LFT)": _panel({
        "ALT (SGPT)": _TRANSAMINASE,
        "AST (SGOT)": _TRANSAMINASE,
        "Total Bilirubin": ThresholdRule(
            bands=_bands((">", 3.0, A, "Total bilirubin {value} mg/dL: jaundice, liver dysfunction")),
            reference="0.1-1.2",
            unit="mg/dL",
        ),
        "Albumin": ThresholdRule(
            bands=_bands(("<", 2.5, A, "Albumin {value} g/dL: marked hypoalbuminemia")),
            reference="3.5-5.0",
            unit="g/dL",
        ),
    }),
    "Renal Function Test (RFT)": _panel({
        "Creatinine": ThresholdRule(
            bands=_bands(
                (">", 3.0, C, "Creatinine {value} mg/dL: acute kidney injury or failure"),
                (">", 1.5, A, "Creatinine {value} mg/dL: kidney function compromised"),
            ),
            reference="0.6-1.2",
            unit="mg/dL",
        ),
        "Urea": ThresholdRule(
            bands=_bands((">", 50.0, A, "Urea {value} mg/dL: kidney dysfunction")),
            reference="15-45",
            unit="mg/dL",
        ),
        "Blood Urea": ThresholdRule(
            bands=_bands((">", 50.0, A, "Urea {value} mg/dL: kidney dysfunction")),
            reference="15-45",
            unit="mg/dL",
        ),
        "Sodium": ThresholdRule(
            bands=_bands(
                ("<", 120.0, C, "Sodium {value} mEq/L: severe hyponatremia, seizure risk"),
                (">", 160.0, C, "Sodium {value} mEq/L: severe hypernatremia"),
                ("<", 135.0, A, "Sodium {value} mEq/L: hyponatremia"),
                (">", 145.0, A, "Sodium {value} mEq/L: hypernatremia"),
            ),
            reference="135-145",
            unit="mEq/L",
        ),
        "Potassium": ThresholdRule(
            bands=_bands(
                ("<", 2.5, C, "Potassium {value} mEq/L: severe hypokalemia, arrhythmia risk"),
                (">", 6.0, C, "Potassium {value} mEq/L: severe hyperkalemia, arrhythmia risk"),
                ("<", 3.5, A, "Potassium {value} mEq/L: hypokalemia"),
                (">", 5.5, A, "Potassium {value} mEq/L: hyperkalemia"),
            ),
            reference="3.5-5.0",
            unit="mEq/L",
        ),
    }),
    "Random Blood Sugar (RBS)": _panel({
        "Blood Glucose": _GLUCOSE_RANDOM,
    }),
    "Fasting Blood Sugar (FBS)": _panel({
        "Blood Glucose": _GLUCOSE_FASTING,
    }),
    "ESR (Erythrocyte Sedimentation Rate)": _panel({
        "ESR (1 hour)": ThresholdRule(
            bands=_bands(
                (">", 100.0, A, "ESR {value} mm/hr: markedly elevated, further workup needed"),
                (">", 50.0, A, "ESR {value} mm/hr: elevated, inflammation or infection"),
                (">", 20.0, A, "ESR {value} mm/hr: mildly elevated"),
            ),
            reference="0-20",
            unit="mm/hr",
        ),
    }),
    "Thyroid Hormones": _panel({
        "TSH": ThresholdRule(
            bands=_bands(
                (">", 10.0, A, "TSH {value} µIU/mL: markedly elevated, suggests hypothyroidism"),
                (">", 4.0, A, "TSH {value} µIU/mL: elevated, consider subclinical hypothyroidism"),
                ("<", 0.4, A, "TSH {value} µIU/mL: suppressed, suggests hyperthyroidism"),
            ),
            reference="0.4-4.0",
            unit="µIU/mL",
        ),
        "T4": ThresholdRule(
            bands=_bands(
                ("<", 5.0, A, "T4 {value} µg/dL: low, suggests hypothyroidism"),
                (">", 12.0, A, "T4 {value} µg/dL: elevated, suggests hyperthyroidism"),
            ),
            reference="5-12",
            unit="µg/dL",
        ),
    }),
    "Alkaline Phosphatase (ALP)": _panel({
        "ALP": ThresholdRule(
            bands=_bands(
                (">", 500.0, C, "ALP {value} U/L: markedly elevated, urgent imaging recommended"),
                (">", 300.0, A, "ALP {value} U/L: significantly elevated"),
                (">", 147.0, A, "ALP {value} U/L: mildly elevated"),
            ),
            reference="44-147",
            unit="U/L",
        ),
    }),
    "Rheumatoid Factor": _panel(
        {},
        combinations=(
            AllOfRule(
                label="RF titer",
                conditions=(
                    Condition("RF", ("positive", "reactive")),
                    Condition("Titer", (">80",)),
                ),
                outcome=Outcome(A, "Rheumatoid factor strongly positive (titer >80): suggests rheumatoid arthritis"),
            ),
            AllOfRule(
                label="RF titer",
                conditions=(
                    Condition("RF", ("positive", "reactive")),
                    Condition("Titer", ("20-40", "40-80")),
                ),
                outcome=Outcome(A, "Rheumatoid factor positive (titer {value}): correlate clinically"),
            ),
        ),
    ),
    "Pregnancy Test (HCG)": _panel({
        "β-hCG": _positive(A, "Pregnancy test positive: confirm and start prenatal care"),
    }),
    "Gonorrhea Test": _panel({
        "Gonorrhea": _positive(C, "Gonorrhea positive: treat and notify partners"),
    }),
    "Chlamydia Test": _panel({
        "Chlamydia": _positive(C, "Chlamydia positive: treat and notify partners"),
    }),
    "Toxoplasma Test": _panel({
        "Toxoplasma IgG": _positive(A, "Toxoplasma antibody positive: past or current infection"),
        "Toxoplasma IgM": _positive(A, "Toxoplasma antibody positive: past or current infection"),
        "Toxoplasma": _positive(A, "Toxoplasma antibody positive: past or current infection"),
    }),
    "Filariasis Tests": _panel({
        "Filaria Antigen": _positive(A, "Filariasis positive: treatment indicated", "seen"),
        "Microfilaria": _positive(A, "Microfilaria seen: treatment indicated", "seen"),
    }),
    "Schistosomiasis Test": _panel({
        "Schistosoma Antibody": _positive(A, "Schistosomiasis positive: treatment indicated", "seen"),
        "Schistosoma Ova": _positive(A, "Schistosoma ova seen: treatment indicated", "seen"),
    }),
    "Leishmaniasis Test": _panel({
        "Leishmania Antibody": _positive(C, "Leishmaniasis positive: specialist consultation required"),
        "Leishmania": _positive(C, "Leishmaniasis positive: specialist consultation required"),
    }),
    "Tuberculosis Tests": _panel({
        "TB GeneXpert": _positive(C, "Tuberculosis positive: start treatment and infection control", "detected"),
        "Mantoux Test": _positive(C, "Tuberculosis positive: start treatment and infection control", "detected"),
        "TB Antibody": _positive(C, "Tuberculosis positive: start treatment and infection control", "detected"),
    }),
    "Meningitis Tests": _panel({
        "CSF Analysis": _positive(C, "Meningitis test positive: immediate treatment required"),
        "Meningitis PCR": _positive(C, "Meningitis test positive: immediate treatment required", "detected"),
    }),
    "Yellow Fever Test": _panel({
        "Yellow Fever IgM": _positive(C, "Yellow fever positive: isolate patient and notify public health"),
        "Yellow Fever": _positive(C, "Yellow fever positive: isolate patient and notify public health"),
    }),
    "Typhus Test": _panel({
        "Typhus Antibody": _positive(A, "Typhus positive: rickettsial infection, treat promptly"),
        "Rickettsia": _positive(A, "Typhus positive: rickettsial infection, treat promptly"),
    }),
})

# Alternate spellings seen in stored payloads -> canonical catalog key.
PANEL_ALIASES: Mapping[str, str] = MappingProxyType({
    "Hemoglobin (Hb)": "Hemoglobin (HB)",
    "Stool Analysis": "Stool Examination",
    "Urinalysis": "Urine Analysis",
    "CBC": "Complete Blood Count (CBC)",
    "Widal Test": "Widal Test (Typhoid)",
})
