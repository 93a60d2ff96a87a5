"""
Built-in fallback dataset, served when every provider fails or returns nothing.

All records are tagged Source.FALLBACK and use 'fallback_' ids.
"""

from injury_info.schemas.records import Article, ArticleContent, LawFirm, SettlementRecord, Source
from injury_info.services.text_utils import create_slug

FALLBACK_YEAR = "2024"


def fallback_articles() -> list[Article]:
    return [
        Article(
            id="fallback_1",
            source=Source.FALLBACK,
            title="Mesothelioma and Asbestos Exposure",
            description="Comprehensive guide to mesothelioma, its causes, symptoms, and legal options for victims of asbestos exposure.",
            category="medical",
            content=ArticleContent(
                overview=(
                    "Mesothelioma is a rare and aggressive cancer that develops in the lining of the lungs, "
                    "abdomen, or heart. It is primarily caused by exposure to asbestos, a naturally occurring "
                    "mineral that was widely used in construction, manufacturing, and other industries until "
                    "the late 1970s."
                ),
                symptoms=[
                    "Chest pain and shortness of breath",
                    "Persistent cough and fatigue",
                    "Weight loss and loss of appetite",
                    "Fluid buildup around the lungs",
                    "Abdominal pain and swelling (for peritoneal mesothelioma)",
                ],
                causes=[
                    "Asbestos exposure in the workplace",
                    "Secondary exposure through family members",
                    "Environmental exposure near asbestos mines or factories",
                    "Exposure during home renovations or demolition",
                ],
                treatments=[
                    "Surgery to remove tumors",
                    "Chemotherapy and radiation therapy",
                    "Immunotherapy and targeted therapy",
                    "Palliative care for symptom management",
                ],
                legal_options=[
                    "Personal injury lawsuits against asbestos manufacturers",
                    "Workers' compensation claims",
                    "Asbestos trust fund claims",
                    "Wrongful death lawsuits for family members",
                ],
                settlements=(
                    "Mesothelioma settlements typically range from $1.2 million to $2.4 million, with some "
                    "cases reaching $10 million or more. Factors affecting settlement amounts include the "
                    "severity of the disease, age of the victim, exposure history, and jurisdiction."
                ),
            ),
        ),
        Article(
            id="fallback_2",
            source=Source.FALLBACK,
            title="Roundup Weedkiller Cancer Lawsuits",
            description="Information about Roundup lawsuits alleging the weedkiller causes non-Hodgkin lymphoma and other cancers.",
            category="legal",
            content=ArticleContent(
                overview=(
                    "Roundup is a popular weedkiller manufactured by Monsanto (now owned by Bayer). The active "
                    "ingredient, glyphosate, has been linked to non-Hodgkin lymphoma and other cancers in "
                    "numerous studies and lawsuits."
                ),
                symptoms=[
                    "Swollen lymph nodes in neck, armpits, or groin",
                    "Unexplained weight loss and fatigue",
                    "Night sweats and fever",
                    "Chest pain and shortness of breath",
                    "Abdominal pain and swelling",
                ],
                causes=[
                    "Direct exposure to Roundup during application",
                    "Exposure to glyphosate in food and water",
                    "Occupational exposure in agriculture and landscaping",
                    "Residential use in gardens and lawns",
                ],
                treatments=[
                    "Chemotherapy and radiation therapy",
                    "Immunotherapy and targeted therapy",
                    "Stem cell transplantation",
                    "Clinical trials for new treatments",
                ],
                legal_options=[
                    "Product liability lawsuits against Bayer/Monsanto",
                    "Class action lawsuits",
                    "Wrongful death claims",
                    "Settlement fund claims",
                ],
                settlements=(
                    "Bayer has agreed to pay $10.9 billion to settle approximately 100,000 Roundup lawsuits. "
                    "Individual settlements typically range from $5,000 to $250,000, depending on the severity "
                    "of the cancer and exposure history."
                ),
            ),
        ),
        Article(
            id="fallback_3",
            source=Source.FALLBACK,
            title="3M Combat Arms Earplug Litigation",
            description="Details about the 3M earplug lawsuits alleging defective military earplugs caused hearing loss and tinnitus.",
            category="legal",
            content=ArticleContent(
                overview=(
                    "3M Combat Arms earplugs were issued to military personnel between 2003 and 2015. Veterans "
                    "allege the earplugs were defective and failed to protect their hearing, leading to "
                    "hearing loss and tinnitus."
                ),
                symptoms=[
                    "Hearing loss in one or both ears",
                    "Ringing or buzzing in the ears (tinnitus)",
                    "Difficulty understanding speech",
                    "Sensitivity to loud noises",
                    "Balance problems and dizziness",
                ],
                causes=[
                    "Defective design of the earplugs",
                    "Failure to properly seal the ear canal",
                    "Inadequate noise reduction",
                    "Manufacturing defects",
                ],
                treatments=[
                    "Hearing aids and cochlear implants",
                    "Tinnitus management therapy",
                    "Cognitive behavioral therapy",
                    "Sound therapy and masking devices",
                ],
                legal_options=[
                    "Product liability lawsuits against 3M",
                    "Veterans' disability benefits",
                    "Class action lawsuits",
                    "Settlement fund claims",
                ],
                settlements=(
                    "3M has agreed to pay $6 billion to settle approximately 260,000 earplug lawsuits. "
                    "Individual settlements average around $24,000, with some cases reaching $100,000 or more "
                    "depending on the severity of hearing damage."
                ),
            ),
        ),
        Article(
            id="fallback_4",
            source=Source.FALLBACK,
            title="Silicosis and Silica Dust Exposure",
            description="Information about silicosis, a lung disease caused by exposure to silica dust in construction and manufacturing.",
            category="medical",
            content=ArticleContent(
                overview=(
                    "Silicosis is a progressive lung disease caused by inhaling crystalline silica dust. It "
                    "commonly affects workers in construction, mining, manufacturing, and other industries "
                    "where silica dust is present."
                ),
                symptoms=[
                    "Shortness of breath and chest pain",
                    "Persistent cough and fatigue",
                    "Weight loss and loss of appetite",
                    "Fever and night sweats",
                    "Cyanosis (bluish skin color)",
                ],
                causes=[
                    "Exposure to silica dust in construction",
                    "Mining and quarrying operations",
                    "Manufacturing of glass, ceramics, and stone products",
                    "Sandblasting and abrasive blasting",
                    "Tunnel construction and drilling",
                ],
                treatments=[
                    "Oxygen therapy and pulmonary rehabilitation",
                    "Medications to reduce inflammation",
                    "Lung transplantation in severe cases",
                    "Prevention of further exposure",
                ],
                legal_options=[
                    "Workers' compensation claims",
                    "Personal injury lawsuits against employers",
                    "Product liability claims against equipment manufacturers",
                    "Class action lawsuits",
                ],
                settlements=(
                    "Silicosis settlements vary widely based on the severity of the disease and jurisdiction. "
                    "Typical settlements range from $50,000 to $500,000, with some cases reaching $1 million "
                    "or more for severe cases."
                ),
            ),
        ),
        Article(
            id="fallback_5",
            source=Source.FALLBACK,
            title="Talcum Powder Ovarian Cancer Lawsuits",
            description="Information about talcum powder lawsuits alleging the product causes ovarian cancer in women.",
            category="legal",
            content=ArticleContent(
                overview=(
                    "Talcum powder lawsuits allege that Johnson & Johnson's talc-based products, including Baby "
                    "Powder and Shower to Shower, contain asbestos and cause ovarian cancer in women who used "
                    "them for feminine hygiene."
                ),
                symptoms=[
                    "Abdominal bloating and pain",
                    "Pelvic pain and pressure",
                    "Changes in bowel habits",
                    "Frequent urination",
                    "Unexplained weight loss",
                ],
                causes=[
                    "Long-term use of talcum powder for feminine hygiene",
                    "Asbestos contamination in talc products",
                    "Inhalation of talc particles",
                    "Application to genital area",
                ],
                treatments=[
                    "Surgery to remove ovaries and fallopian tubes",
                    "Chemotherapy and radiation therapy",
                    "Targeted therapy and immunotherapy",
                    "Hormone therapy",
                ],
                legal_options=[
                    "Product liability lawsuits against Johnson & Johnson",
                    "Wrongful death claims",
                    "Class action lawsuits",
                    "Settlement fund claims",
                ],
                settlements=(
                    "Johnson & Johnson has faced thousands of talcum powder lawsuits. Individual settlements "
                    "have ranged from $100,000 to $100 million, with some jury verdicts exceeding $4 billion."
                ),
            ),
        ),
        Article(
            id="fallback_6",
            source=Source.FALLBACK,
            title="Paraquat Parkinson's Disease Lawsuits",
            description="Information about Paraquat lawsuits alleging the herbicide causes Parkinson's disease in agricultural workers.",
            category="legal",
            content=ArticleContent(
                overview=(
                    "Paraquat is a highly toxic herbicide used in agriculture. Studies have linked Paraquat "
                    "exposure to an increased risk of Parkinson's disease, leading to thousands of lawsuits "
                    "against manufacturers."
                ),
                symptoms=[
                    "Tremors in hands, arms, legs, or jaw",
                    "Slowed movement and stiffness",
                    "Balance problems and falls",
                    "Speech and swallowing difficulties",
                    "Cognitive changes and depression",
                ],
                causes=[
                    "Direct exposure during application",
                    "Inhalation of Paraquat spray",
                    "Skin contact with contaminated surfaces",
                    "Accidental ingestion or exposure",
                ],
                treatments=[
                    "Medications to manage symptoms",
                    "Deep brain stimulation",
                    "Physical and occupational therapy",
                    "Speech therapy and dietary changes",
                ],
                legal_options=[
                    "Product liability lawsuits against manufacturers",
                    "Workers' compensation claims",
                    "Class action lawsuits",
                    "Wrongful death claims",
                ],
                settlements=(
                    "Paraquat lawsuits are still in early stages, but settlements are expected to range from "
                    "$100,000 to $1 million or more, depending on the severity of Parkinson's symptoms and "
                    "exposure history."
                ),
            ),
        ),
    ]


def fallback_law_firms() -> list[LawFirm]:
    return [
        LawFirm(
            id="fallback_firm_1",
            source=Source.FALLBACK,
            name="Saddle Rock Legal Group",
            location="Nationwide",
            phone="(800) 123-4567",
            website="https://legalinjuryadvocates.com",
            specialties=["Mesothelioma", "Asbestos", "Product Liability"],
            experience="20+ years",
            success_rate="95%",
            notable_settlements=["$2.4M mesothelioma settlement", "$1.8M asbestos case"],
        ),
        LawFirm(
            id="fallback_firm_2",
            source=Source.FALLBACK,
            name="National Injury Law Center",
            location="California, Texas, Florida",
            phone="(800) 987-6543",
            website="https://nationalinjury.com",
            specialties=["Roundup", "Talcum Powder", "Medical Devices"],
            experience="15+ years",
            success_rate="90%",
            notable_settlements=["$250K Roundup settlement", "$500K talc case"],
        ),
        LawFirm(
            id="fallback_firm_3",
            source=Source.FALLBACK,
            name="Veterans Legal Services",
            location="Nationwide",
            phone="(800) 555-0123",
            website="https://veteranslegal.org",
            specialties=["3M Earplugs", "Military Injuries", "VA Benefits"],
            experience="25+ years",
            success_rate="88%",
            notable_settlements=["$100K earplug case", "$75K tinnitus claim"],
        ),
    ]


# condition (lowercase) -> (display name, range, average, total cases)
_DEFAULT_SETTLEMENTS: dict[str, tuple[str, str, str, str]] = {
    "mesothelioma": ("Mesothelioma", "$1.2 million to $2.4 million", "$1.8 million", "Thousands"),
    "lung cancer": ("Lung Cancer", "$500,000 to $1.5 million", "$1 million", "Hundreds"),
    "ovarian cancer": ("Ovarian Cancer", "$100,000 to $500,000", "$300,000", "Thousands"),
    "non-hodgkin lymphoma": ("Non-Hodgkin Lymphoma", "$50,000 to $250,000", "$150,000", "Hundreds"),
}


def fallback_settlements(condition: str, state: str | None = None) -> list[SettlementRecord]:
    """One default record for the condition; unknown conditions get a generic 'Varies by case' record."""
    key = (condition or "").strip().lower()
    known = _DEFAULT_SETTLEMENTS.get(key)
    if known:
        name, settlement_range, average, total = known
    else:
        name, settlement_range, average, total = (
            (condition or "").strip(),
            "Varies by case",
            "Contact attorney for estimate",
            "Varies",
        )
    return [
        SettlementRecord(
            id=f"fallback_settlement_{create_slug(name) or 'general'}",
            source=Source.FALLBACK,
            condition=name,
            state=(state or "").strip(),
            settlement_range=settlement_range,
            average_settlement=average,
            total_cases=total,
            year=FALLBACK_YEAR,
        )
    ]
