"""Slovak sentences read to the caller by the voice agent.

Every function is pure and deterministic: same input, same text. The
output is plain text without markup or emoji so TTS reads it verbatim.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from app.services.dates import (
    display_time,
    format_voice_date,
    relative_day_phrase,
    slovak_count,
)

if TYPE_CHECKING:
    from collections.abc import Sequence
    from datetime import date

    from app.domain.booking import BookingRequest, ReservationResult
    from app.domain.catalog import Category, Service
    from app.domain.slots import DayOverview, MatchResult, Slot, SoonestResult
    from config.settings.bookio import LocationInfo

GENERIC_APOLOGY = "Nastala chyba. Skúste to prosím znovu."

_SEARCH_EXAMPLES = ("Hydrafacial", "laserová epilácia", "pleťové ošetrenie")


def join_slovak(items: Sequence[str], conjunction: str = "a") -> str:
    """``X``; ``X a Y``; ``X, Y a Z``."""
    if not items:
        return ""
    if len(items) == 1:
        return items[0]
    return f"{', '.join(items[:-1])} {conjunction} {items[-1]}"


def count_terms(count: int) -> str:
    """``1 termín``, ``3 termíny``, ``7 termínov``."""
    return f"{count} {slovak_count(count, 'termín', 'termíny', 'termínov')}"


def _times(slots: Sequence[Slot]) -> list[str]:
    return [display_time(slot) for slot in slots]


def available_times_sentence(slots: Sequence[Slot]) -> str:
    """One sentence listing times, singular for one slot."""
    times = _times(slots)
    if len(times) == 1:
        return f"Dostupný je termín o {times[0]}."
    return f"Dostupné sú termíny o {join_slovak(times)}."


def soonest_available(result: SoonestResult, today: date) -> str:
    """Answer for the soonest-available question.

    The spoken day is relative to ``today``, not to the start of the scan.
    """
    if not result.found or result.slot is None or result.date is None:
        if result.timed_out:
            return (
                "Ľutujem, nestihla som overiť všetky dni. "
                "Skúste sa prosím spýtať na konkrétny dátum."
            )
        return (
            "Ľutujem, v najbližších dňoch nie sú dostupné žiadne voľné termíny. "
            "Skúste sa prosím spýtať na konkrétny dátum."
        )

    offset = (result.date - today).days
    time = display_time(result.slot)
    if offset == 0:
        when = "dnes"
    elif offset == 1:
        when = f"zajtra, {format_voice_date(result.date)},"
    else:
        days = slovak_count(offset, "deň", "dni", "dní")
        when = f"{format_voice_date(result.date)}, teda o {offset} {days},"

    parts = [f"Najbližší voľný termín je {when} o {time}."]
    if result.alternative_slots:
        parts.append(f"V ten deň mám aj {join_slovak(_times(result.alternative_slots), 'alebo')}.")
    parts.append("Vyhovuje vám?")
    return " ".join(parts)


def desired_slot(match: MatchResult, day: date) -> str:
    """Answer for a check of one specific date and time."""
    voice_date = format_voice_date(day)
    if match.available:
        return (
            f"Výborné! Termín {voice_date} o {match.requested_time} je voľný. "
            "Chcete si ho rezervovať?"
        )
    if not match.alternatives:
        return (
            f"Ľutujem, na {voice_date} nie sú dostupné žiadne termíny. "
            "Skúste iný dátum alebo sa spýtajte na najbližší voľný termín."
        )
    alternatives = join_slovak(_times(match.alternatives), "alebo")
    return (
        f"Ľutujem, termín {voice_date} o {match.requested_time} nie je dostupný. "
        f"Najbližšie voľné časy sú o {alternatives}. Ktorý by vám vyhovoval?"
    )


def day_times(
    day: date,
    slots: Sequence[Slot],
    *,
    follow_up: bool,
    has_more: bool,
    period: str | None = None,
) -> str:
    """One page of times for a day.

    The first page lists the times; follow-up pages say whether these are
    the last ones.
    """
    if not slots:
        voice_date = format_voice_date(day)
        if follow_up:
            return f"Na {voice_date} už nemám ďalšie termíny."
        if period:
            return f"Na {voice_date} nie sú dostupné žiadne termíny {period}."
        return f"Na {voice_date} nie sú dostupné žiadne termíny."

    times = _times(slots)
    if not follow_up:
        return available_times_sentence(slots)
    if len(times) == 1:
        lead = "Mám ešte o" if has_more else "Posledný termín je o"
        return f"{lead} {times[0]}. Vyhovuje?"
    lead = "Mám ešte o" if has_more else "Posledné termíny sú o"
    return f"{lead} {join_slovak(times, 'alebo')}. Vyhovuje niečo?"


def earlier_times(day: date, requested_time: str, slots: Sequence[Slot]) -> str:
    if not slots:
        return (
            f"Pred {requested_time} na {format_voice_date(day)} "
            "nie sú dostupné žiadne skoršie termíny."
        )
    times = _times(slots)
    if len(times) == 1:
        return f"Skorší termín je o {times[0]}."
    return f"Skoršie termíny sú o {join_slovak(times)}."


def overview(days: Sequence[DayOverview], today: date, *, per_day: int = 2) -> str:
    """Short summary of the next few days, at most ``per_day`` times each."""
    sentences: list[str] = []
    for item in days:
        if item.slots is None or item.slots.is_empty:
            continue
        offset = (item.date - today).days
        phrase = relative_day_phrase(offset, item.date)
        shown = _times(item.slots.all[:per_day])
        sentence = f"{phrase.capitalize()} o {join_slovak(shown, 'alebo')}"
        remaining = item.slots.total - len(shown)
        if remaining > 0:
            sentence += f" a ďalšie {count_terms(remaining)}"
        sentences.append(sentence + ".")

    if not sentences:
        return "V najbližších dňoch nie sú dostupné žiadne termíny."
    return " ".join(["Najbližšie voľné termíny:", *sentences, "Ktorý termín by vám vyhovoval?"])


def services_overview(categories: Sequence[Category], *, limit: int = 6) -> str:
    if not categories:
        return "Momentálne neviem načítať zoznam služieb. Skúste prosím povedať, o akú službu máte záujem."
    titles = [category.title for category in categories[:limit]]
    more = " a ďalšie" if len(categories) > limit else ""
    return f"Ponúkame napríklad {join_slovak(titles)}{more}. Ktorá služba vás zaujíma?"


def search_results(term: str, services: Sequence[Service], *, limit: int = 3) -> str:
    if not services:
        return (
            f"Ľutujem, nenašla som službu „{term}“. "
            f"Skúste napríklad {join_slovak(list(_SEARCH_EXAMPLES), 'alebo')}."
        )
    found = len(services)
    noun = slovak_count(found, "službu", "služby", "služieb")
    lines = [f"Našla som {found} {noun} pre „{term}“."]
    for index, service in enumerate(services[:limit], start=1):
        details = ", ".join(
            part
            for part in (
                f"cena {service.price}" if service.price else "",
                f"trvanie {service.duration_text}" if service.duration_text else "",
            )
            if part
        )
        lines.append(f"{index}. {service.title}" + (f", {details}." if details else "."))
    lines.append("Ktorá služba vás zaujíma? Môžem vám nájsť voľné termíny.")
    return " ".join(lines)


def reservation_confirmed(result: ReservationResult, day: date, time: str) -> str:
    order = result.order
    order_id = order.get("orderId")
    parts = [
        f"Rezervácia bola úspešne vytvorená na {format_voice_date(day)} o {time}.",
    ]
    if order_id:
        parts.append(f"Číslo objednávky je {order_id}.")
    parts.append("Potvrdenie sme vám poslali e-mailom.")
    return " ".join(parts)


def reservation_failed(contact_phone: str) -> str:
    return (
        "Ľutujem, rezerváciu sa nepodarilo dokončiť. "
        f"Skúste prosím iný termín alebo nám zavolajte na {contact_phone}."
    )


def cancellation_guidance(contact_phone: str) -> str:
    return (
        "Pre zrušenie rezervácie použite prosím odkaz v potvrdzujúcom e-maile "
        f"alebo nás kontaktujte priamo na čísle {contact_phone}. "
        "Zrušenie cez telefón nie je možné z bezpečnostných dôvodov."
    )


def opening_hours(studio_name: str, locations: Sequence[LocationInfo], contact_phone: str) -> str:
    parts = [f"{studio_name}."]
    for location in locations:
        hours = ", ".join(location.opening_hours)
        parts.append(f"Pobočka {location.name}, {location.address}: {hours}.")
    parts.append(f"Kontakt: {contact_phone}.")
    return " ".join(parts)


def provider_unavailable(contact_phone: str) -> str:
    return (
        "Ľutujem, rezervačný systém momentálne neodpovedá. "
        f"Skúste to prosím o chvíľu alebo nám zavolajte na {contact_phone}."
    )


def timed_out(contact_phone: str) -> str:
    return (
        "Ospravedlňujem sa, overenie termínov trvá príliš dlho. "
        f"Skúste to prosím znovu alebo nám zavolajte na {contact_phone}."
    )


def unrecognized(raw_tool: str | None) -> str:
    lead = f"Nepoznám nástroj: {raw_tool}." if raw_tool else "Nerozumiem, akú akciu chcete vykonať."
    return (
        f"{lead} Môžem vám pomôcť s vyhľadaním služieb, "
        "informáciami o otváracích hodinách alebo s rezerváciou termínu."
    )


def missing_date() -> str:
    return "Pre kontrolu dostupnosti je potrebné zadať dátum."


def booking_ask_service() -> str:
    return (
        "Rada vám pomôžem s rezerváciou. Aké ošetrenie si želáte? "
        "Napríklad Hydrafacial, laserová epilácia alebo pleťové ošetrenie."
    )


def booking_ask_location(locations: Sequence[LocationInfo]) -> str:
    names = [
        location.name if location.address == location.name else f"{location.name}, {location.address}"
        for location in locations
    ]
    return f"V ktorej pobočke si želáte rezerváciu? Máme {join_slovak(names, 'alebo')}."


def booking_ask_date(service: str, location: LocationInfo, days_summary: str) -> str:
    return f"Výborne, {service} v pobočke {location.name}. {days_summary}"


def booking_ask_time(day: date, slots: Sequence[Slot]) -> str:
    voice_date = format_voice_date(day)
    if not slots:
        return f"Na {voice_date} nie sú voľné termíny. Vyberte si prosím iný deň."
    shown = _times(slots[:4])
    return f"Dátum {voice_date} mám zapísaný. Voľné časy sú o {join_slovak(shown, 'alebo')}. Ktorý vám vyhovuje?"


def booking_ask_name(day: date, time: str) -> str:
    return (
        f"Výborne, termín {format_voice_date(day)} o {time} je voľný. "
        "Pre dokončenie rezervácie potrebujem vaše meno a priezvisko."
    )


def booking_ask_phone(customer_name: str) -> str:
    return f"Ďakujem, {customer_name}. Ešte potrebujem vaše telefónne číslo pre potvrdenie rezervácie."


def booking_request_done(request: BookingRequest, location: LocationInfo, day: date) -> str:
    return (
        "Perfektné, vaša požiadavka na rezerváciu bola odoslaná. "
        f"{request.service} v pobočke {location.name}, {format_voice_date(day)} o {request.time}. "
        "Čoskoro vás budeme kontaktovať pre potvrdenie termínu. Tešíme sa na vás."
    )


def booking_request_failed(contact_phone: str) -> str:
    return (
        "Nastala chyba pri odosielaní rezervácie. "
        f"Prosím kontaktujte nás priamo na čísle {contact_phone}."
    )


def booking_slot_taken(day: date, time: str, alternatives: Sequence[Slot]) -> str:
    voice_date = format_voice_date(day)
    if not alternatives:
        return f"Ľutujem, {voice_date} o {time} už nie je voľné. Vyberte si prosím iný deň."
    return (
        f"Ľutujem, {voice_date} o {time} už nie je voľné. "
        f"Môžem ponúknuť {join_slovak(_times(alternatives[:3]), 'alebo')}."
    )
