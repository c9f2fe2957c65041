"""
GreenTrack India: Canned Sustainability Advice
Six-step plans served when the LLM is unavailable, stored as structured
AdviceStep records and rendered to the restricted HTML subset
(<ol> <li> <b> <i> <a> <br>) only at the presentation boundary.
"""

from html import escape
from types import MappingProxyType
from typing import Sequence

from models import AdviceStep, SchemeLink

STEP_TITLES = (
    "Current Energy Efficiency",
    "Renewable Transition (Solar Setup)",
    "Financial & Environmental Impact",
    "Government Support",
    "Maintenance & Monitoring",
    "Final Recommendation",
)

# ── Scheme links ──────────────────────────────────────────────────────────────
ROOFTOP_URL = "https://solarrooftop.gov.in"
KUSUM_URL   = "https://mnre.gov.in/pm-kusum"

PM_ROOFTOP = SchemeLink(
    name="Pradhan Mantri Rooftop Solar Scheme",
    description="40% subsidy for residential, 30% for commercial.",
    url=ROOFTOP_URL,
)
PM_KUSUM = SchemeLink(
    name="PM-KUSUM",
    description="Rural and agricultural solar support.",
    url=KUSUM_URL,
    label="Official Page",
)


def _plan(*steps: tuple) -> tuple:
    """Zip (body, benefit, links) triples with the six fixed step titles."""
    return tuple(
        AdviceStep(title=title, body=body, benefit=benefit, links=list(links))
        for title, (body, benefit, links) in zip(STEP_TITLES, steps)
    )


AC_PLAN = _plan(
    ("Optimize your existing AC by cleaning filters every 2 weeks, setting thermostat to "
     "24–26°C, and sealing window gaps.",
     "Reduces baseline consumption by 15–20% before solar transition.", []),
    ("Install a 2–3 kW rooftop solar system sized to power your AC during peak daytime hours "
     "(10 AM–4 PM). Setup involves roof assessment, panel installation, and grid connection "
     "approval. Estimated cost: ₹1.8–₹2.4 lakh. Installation time: 5–7 days.",
     "Reduced grid dependency during peak AC usage hours.", []),
    ("Expected monthly savings: ₹3,500–₹5,000 (depending on AC usage). Payback period: "
     "~4–5 years. Annual CO₂ reduction: ~2.5–3.2 tons/year.",
     "Long-term cost reduction and measurable environmental impact.", []),
    ("", None, [
        SchemeLink(name="Rooftop Solar Scheme",
                   description="30–40% subsidy for residential & commercial setups.",
                   url=ROOFTOP_URL),
        SchemeLink(name="PM-KUSUM",
                   description="Additional support for agricultural or rural installations.",
                   url=KUSUM_URL, label="Official Page"),
    ]),
    ("Clean solar panels monthly with soft brush and water. Install a basic energy monitor "
     "to track real-time generation and consumption.",
     "Maintains 25+ year system lifespan and ensures peak efficiency.", []),
    ("By installing a 2.5 kW rooftop solar system, your AC costs could drop by "
     "₹42,000–₹60,000 annually, recover investment in ~4–5 years, and eliminate ~3 tons "
     "of CO₂ emissions yearly.", None, []),
)

SOLAR_PLAN = _plan(
    ("Before solar installation, audit your top energy consumers (AC, refrigerator, "
     "lighting, water heater). Optimize each by 15–20% through maintenance and behavioral "
     "changes.",
     "Reduces baseline load, allowing smaller (cheaper) solar system.", []),
    ("Install a 3–5 kW rooftop solar system for small businesses or 2–3 kW for homes. "
     "Setup process: (1) Roof assessment and structural approval, (2) Panel & inverter "
     "installation, (3) Grid connection and net metering registration. Estimated cost: "
     "₹2.0–₹3.0 lakh for 3 kW system. Installation time: 5–7 days.",
     "Generates 12–15 kWh/day; covers 60–80% of typical consumption.", []),
    ("Expected monthly savings: ₹4,000–₹6,500 (₹48,000–₹78,000 annually). Payback period: "
     "~4–5 years. Annual CO₂ reduction: ~3.5–4.5 tons/year.",
     "Significant long-term savings and verified environmental contribution.", []),
    ("", None, [PM_ROOFTOP, PM_KUSUM]),
    ("Clean panels quarterly with soft brush. Inspect inverter annually. Use energy "
     "monitoring app to track generation, consumption, and grid export.",
     "Ensures consistent 25+ year performance and early fault detection.", []),
    ("A 3 kW rooftop solar system can save your business ₹60,000 annually, recover costs in "
     "~4 years, and eliminate ~4 tons of CO₂ yearly. Apply for government subsidy to reduce "
     "upfront investment by ₹60,000–₹90,000.", None, []),
)

LED_PLAN = _plan(
    ("Audit all lighting fixtures and replace incandescent/CFL bulbs with 5W–9W LED "
     "equivalents. This immediate step cuts lighting energy by 80%.",
     "Reduces baseline lighting load by 80%; saves ₹200–₹400 per bulb annually.", []),
    ("For large commercial spaces, install a 1–2 kW solar system dedicated to daytime "
     "lighting. Setup: (1) Install solar panels on roof/terrace, (2) Connect to lighting "
     "circuit via inverter, (3) Enable battery backup for evening hours. Estimated cost: "
     "₹80,000–₹1.2 lakh. Installation time: 3–4 days.",
     "Eliminates daytime lighting costs; reduces grid dependency by 40–50%.", []),
    ("Expected monthly savings: ₹1,500–₹2,500 (₹18,000–₹30,000 annually). Payback period: "
     "~3–4 years. Annual CO₂ reduction: ~0.8–1.2 tons/year.",
     "Quick ROI with measurable environmental benefit.", []),
    ("", None, [
        SchemeLink(name="UJALA Scheme",
                   description="Provides LED bulbs at ₹70–₹100 per bulb.",
                   url="https://ujala.gov.in"),
        SchemeLink(name="Rooftop Solar Scheme",
                   description="30–40% subsidy for solar lighting systems.",
                   url=ROOFTOP_URL),
    ]),
    ("LEDs require minimal maintenance (10+ year lifespan). Install motion sensors in "
     "corridors and common areas to eliminate unnecessary usage.",
     "Further 20–30% savings on lighting bills.", []),
    ("By replacing all lighting with LEDs and installing motion sensors, you can save "
     "₹25,000–₹35,000 annually and eliminate ~1 ton of CO₂ yearly. Add a 1.5 kW solar "
     "system to achieve complete energy independence for lighting.", None, []),
)

REFRIGERATOR_PLAN = _plan(
    ("Optimize existing refrigerator by cleaning condenser coils quarterly, checking door "
     "seals, and setting temperature to 3–4°C (fridge) and –18°C (freezer).",
     "Reduces current consumption by 10–15%; saves ₹500–₹800 annually.", []),
    ("For commercial kitchens with multiple refrigerators, install a 2–3 kW solar system "
     "with battery backup to power refrigeration 24/7. Setup: (1) Roof assessment, "
     "(2) Solar panel and battery installation, (3) Refrigerator circuit connection. "
     "Estimated cost: ₹1.5–₹2.2 lakh. Installation time: 5–6 days.",
     "Eliminates grid dependency for refrigeration; ensures continuous cold chain.", []),
    ("Expected monthly savings: ₹2,500–₹4,000 (₹30,000–₹48,000 annually). Payback period: "
     "~4–5 years. Annual CO₂ reduction: ~2–2.5 tons/year.",
     "Significant operational cost reduction with environmental benefit.", []),
    ("", None, [
        SchemeLink(name="Rooftop Solar Scheme",
                   description="40% subsidy for commercial refrigeration systems.",
                   url=ROOFTOP_URL),
        SchemeLink(name="SIDBI Green Financing",
                   description="Low-interest loans for renewable energy in food businesses.",
                   url="https://www.sidbi.in", label="Learn More"),
    ]),
    ("Clean solar panels monthly. Service refrigerator compressor annually. Use energy "
     "monitor to track consumption patterns and detect faults early.",
     "Ensures 25+ year solar lifespan and optimal refrigeration performance.", []),
    ("Upgrade to a 5-star refrigerator and install a 2.5 kW solar system to save "
     "₹40,000–₹50,000 annually, recover costs in ~4 years, and eliminate ~2.5 tons of CO₂ "
     "yearly.", None, []),
)

WATER_PLAN = _plan(
    ("Fix all leaks, install low-flow aerators (2 LPM) on taps, and optimize water heater "
     "temperature to 45–50°C.",
     "Reduces water consumption by 20–30%; saves ₹2,000–₹3,500 annually on water and "
     "heating costs.", []),
    ("Install a 1–2 kW solar water heating system with 100–150L tank for hot water supply. "
     "Setup: (1) Roof assessment, (2) Solar thermal collector installation, (3) Tank and "
     "plumbing connection. Estimated cost: ₹60,000–₹90,000. Installation time: 3–4 days.",
     "Eliminates electric water heater costs; provides hot water year-round.", []),
    ("Expected monthly savings: ₹1,500–₹2,500 (₹18,000–₹30,000 annually). Payback period: "
     "~3–4 years. Annual CO₂ reduction: ~1.2–1.8 tons/year.",
     "Quick ROI with immediate comfort and environmental benefit.", []),
    ("", None, [
        SchemeLink(name="MNRE Solar Water Heating Scheme",
                   description="30% subsidy for solar thermal systems.",
                   url="https://mnre.gov.in"),
        SchemeLink(name="Jal Jeevan Mission",
                   description="Water conservation and efficiency programs.",
                   url="https://jaljeevanmission.gov.in", label="Learn More"),
    ]),
    ("Clean solar collectors annually. Inspect pipes for leaks quarterly. Install smart "
     "water meter to track consumption and detect anomalies.",
     "Maintains 15–20 year system lifespan and ensures optimal performance.", []),
    ("Install a 1.5 kW solar water heating system and fix all leaks to save "
     "₹25,000–₹35,000 annually, recover costs in ~3 years, and eliminate ~1.5 tons of CO₂ "
     "yearly.", None, []),
)

DEFAULT_PLAN = _plan(
    ("Conduct a comprehensive energy audit. Identify top 3 energy consumers (typically AC, "
     "refrigerator, water heater). Optimize each through maintenance and behavioral changes "
     "(e.g., temperature settings, leak fixes).",
     "Reduces baseline consumption by 15–25%; saves ₹5,000–₹10,000 annually.", []),
    ("Install a 3–5 kW rooftop solar system sized to cover 60–80% of your consumption. "
     "Setup process: (1) Roof assessment and structural approval, (2) Solar panel, "
     "inverter, and battery installation, (3) Grid connection and net metering "
     "registration. Estimated cost: ₹2.0–₹3.5 lakh for 3–5 kW system. Installation time: "
     "5–7 days.",
     "Generates 12–20 kWh/day; significantly reduces grid dependency.", []),
    ("Expected monthly savings: ₹5,000–₹8,000 (₹60,000–₹96,000 annually). Payback period: "
     "~4–5 years. Annual CO₂ reduction: ~4–6 tons/year.",
     "Substantial long-term savings with verified environmental contribution.", []),
    ("", None, [PM_ROOFTOP, PM_KUSUM]),
    ("Clean solar panels quarterly. Inspect inverter and batteries annually. Install "
     "energy monitoring system to track real-time generation, consumption, and grid export.",
     "Ensures 25+ year system lifespan and optimal performance.", []),
    ("Install a 4 kW rooftop solar system to save ₹70,000–₹90,000 annually, recover "
     "investment in ~4 years, and eliminate ~5 tons of CO₂ yearly. Apply for government "
     "subsidy to reduce upfront cost by ₹80,000–₹1.2 lakh.", None, []),
)

# First keyword contained in the lowercased query wins; order is significant.
KEYWORD_PLANS = MappingProxyType({
    "ac":           AC_PLAN,
    "solar":        SOLAR_PLAN,
    "led":          LED_PLAN,
    "refrigerator": REFRIGERATOR_PLAN,
    "water":        WATER_PLAN,
})


def select_plan(user_text: str) -> tuple:
    lowered = user_text.lower()
    for keyword, plan in KEYWORD_PLANS.items():
        if keyword in lowered:
            return plan
    return DEFAULT_PLAN


# ── Rendering ─────────────────────────────────────────────────────────────────

def _render_link(link: SchemeLink) -> str:
    return (
        f"<b>{escape(link.name, quote=False)}</b> – {escape(link.description, quote=False)} "
        f'<a href="{escape(link.url)}" target="_blank">{escape(link.label, quote=False)}</a>'
    )


def render_step(number: int, step: AdviceStep) -> str:
    parts = [f"<b>Step {number} – {escape(step.title, quote=False)}:</b>"]
    if step.body:
        parts.append(escape(step.body, quote=False))
    if step.links:
        parts.append("<br>".join(_render_link(link) for link in step.links))
    if step.benefit:
        parts.append(f"<i>Expected benefit:</i> {escape(step.benefit, quote=False)}")
    return f"  <li>{' '.join(parts)}</li>"


def render_advice_html(steps: Sequence[AdviceStep]) -> str:
    items = "\n".join(render_step(n, step) for n, step in enumerate(steps, start=1))
    return f"<ol>\n{items}\n</ol>"
