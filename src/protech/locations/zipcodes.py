"""Zip code tables for the Northeast Ohio service area.

Exact 5-digit entries win over 3-digit prefix entries. A prefix entry's
city is a county-level placeholder (``"Summit County"``), not a town.
"""

import re
from types import MappingProxyType

from protech.core.types import ZipRecord

_ZIP_RE = re.compile(r"^\d{5}$", re.ASCII)

NEAR_AREA_PREFIXES = frozenset(f"44{d}" for d in range(10))

SERVICE_AREA_ZIP_CODES = frozenset({
    # Summit County
    "44301", "44302", "44303", "44304", "44305", "44306", "44307", "44308",
    "44310", "44311", "44312", "44313", "44314", "44319", "44320", "44321",
    "44325", "44326", "44328", "44203", "44221", "44223", "44224", "44278",
    "44236", "44237", "44056", "44067", "44087", "44141", "44222", "44260",
    "44262", "44264", "44286", "44333",
    # Medina County
    "44256", "44281", "44273", "44212", "44254", "44270", "44233", "44275",
    "44280", "44215", "44217", "44235", "44251", "44253",
    # Wayne County
    "44691", "44667", "44677", "44627", "44230", "44287", "44645", "44666",
    "44676", "44214", "44618",
    # Cuyahoga County
    "44101", "44102", "44103", "44104", "44105", "44106", "44107", "44108",
    "44109", "44110", "44111", "44112", "44113", "44114", "44115", "44116",
    "44117", "44118", "44119", "44120", "44121", "44122", "44123", "44124",
    "44125", "44126", "44127", "44128", "44129", "44130", "44134", "44135",
    "44139", "44140", "44142", "44143", "44144", "44145", "44146", "44147",
    "44131", "44132", "44133", "44136", "44137", "44138", "44149",
    "44022", "44070", "44072", "44017", "44040",
    # Stark County
    "44702", "44703", "44704", "44705", "44706", "44707", "44708", "44709",
    "44710", "44714", "44718", "44646", "44647", "44601", "44608", "44612",
    "44615", "44632", "44641", "44643", "44662", "44685", "44699",
    # Ashland County
    "44805", "44837", "44864", "44842",
    # Richland County
    "44901", "44902", "44903", "44904", "44905", "44906", "44907", "44813",
    "44822", "44843", "44862", "44875", "44878",
    # Portage County
    "44240", "44266", "44241", "44242", "44243", "44272", "44288",
    # Lorain County
    "44035", "44039", "44044", "44052", "44053", "44054", "44055", "44074",
    "44090",
    # Geauga County
    "44024", "44026", "44046", "44062", "44065", "44086", "44231", "44285",
    # Lake County
    "44057", "44060", "44077", "44092", "44094", "44095",
})


def _records(county: str, city: str, *zips: str) -> dict[str, ZipRecord]:
    record = ZipRecord(county=county, city=city)
    return {z: record for z in zips}


ZIP_TO_LOCATION: MappingProxyType[str, ZipRecord] = MappingProxyType({
    # Summit
    **_records("Summit", "Akron",
               "44301", "44302", "44303", "44304", "44305", "44306", "44307",
               "44308", "44310", "44311", "44312", "44313", "44314", "44319",
               "44320", "44321", "44325", "44326", "44328"),
    **_records("Summit", "Barberton", "44203"),
    **_records("Summit", "Cuyahoga Falls", "44221", "44223"),
    **_records("Summit", "Stow", "44224"),
    **_records("Summit", "Tallmadge", "44278"),
    **_records("Summit", "Hudson", "44236", "44237"),
    **_records("Summit", "Twinsburg", "44087"),
    **_records("Summit", "Richfield", "44286"),
    **_records("Summit", "Peninsula", "44264"),
    **_records("Summit", "Fairlawn", "44333"),
    **_records("Summit", "Mogadore", "44260"),
    # Medina
    **_records("Medina", "Medina", "44256"),
    **_records("Medina", "Wadsworth", "44281"),
    **_records("Medina", "Seville", "44273"),
    **_records("Medina", "Brunswick", "44212"),
    **_records("Medina", "Lodi", "44254"),
    **_records("Medina", "Rittman", "44270"),
    **_records("Medina", "Hinckley", "44233"),
    **_records("Medina", "Spencer", "44275"),
    **_records("Medina", "Valley City", "44280"),
    # Wayne
    **_records("Wayne", "Wooster", "44691"),
    **_records("Wayne", "Orrville", "44667"),
    **_records("Wayne", "Smithville", "44677"),
    **_records("Wayne", "Fredericksburg", "44627"),
    **_records("Wayne", "Doylestown", "44230"),
    # Cuyahoga
    **_records("Cuyahoga", "Cleveland", "44113", "44114", "44115", "44106"),
    **_records("Cuyahoga", "Lakewood", "44126"),
    **_records("Cuyahoga", "Beachwood", "44122"),
    **_records("Cuyahoga", "Mayfield Heights", "44124"),
    **_records("Cuyahoga", "Parma", "44129", "44134", "44130"),
    **_records("Cuyahoga", "Garfield Heights", "44125"),
    **_records("Cuyahoga", "Westlake", "44145"),
    **_records("Cuyahoga", "Bay Village", "44140"),
    **_records("Cuyahoga", "Strongsville", "44136", "44149"),
    **_records("Cuyahoga", "North Olmsted", "44070"),
    **_records("Cuyahoga", "Solon", "44139"),
    # Stark
    **_records("Stark", "North Canton", "44720"),
    **_records("Stark", "Canton",
               "44702", "44703", "44704", "44705", "44706", "44707", "44708",
               "44709", "44710", "44714"),
    **_records("Stark", "Massillon", "44646", "44647"),
    # Other major areas
    **_records("Ashland", "Ashland", "44805"),
    **_records("Richland", "Mansfield", "44901", "44902"),
    **_records("Portage", "Ravenna", "44266"),
    **_records("Portage", "Kent", "44240"),
    **_records("Lorain", "Elyria", "44035"),
    **_records("Lorain", "North Ridgeville", "44039"),
    **_records("Geauga", "Chardon", "44024"),
})

ZIP_PREFIX_TO_LOCATION: MappingProxyType[str, ZipRecord] = MappingProxyType({
    "442": ZipRecord("Summit", "Summit County"),
    "441": ZipRecord("Cuyahoga", "Cuyahoga County"),
    "446": ZipRecord("Stark", "Stark County"),
    "449": ZipRecord("Richland", "Richland County"),
    "448": ZipRecord("Ashland", "Ashland County"),
    "440": ZipRecord("Lorain", "Lorain County"),
    "443": ZipRecord("Wayne", "Wayne County"),
    "445": ZipRecord("Medina", "Medina County"),
    "444": ZipRecord("Portage", "Portage County"),
    "447": ZipRecord("Geauga", "Geauga County"),
})


def normalize_zip(zip_code: object) -> str | None:
    """Return the stripped 5-digit zip, or None if it isn't one."""
    if not isinstance(zip_code, str):
        return None
    candidate = zip_code.strip()
    return candidate if _ZIP_RE.match(candidate) else None


def is_valid_zip(zip_code: object) -> bool:
    return normalize_zip(zip_code) is not None


def lookup_zip(zip_code: object) -> ZipRecord | None:
    """Look up county/city for a zip code.

    Returns None for malformed input and for zips neither table knows.
    None means "unknown", not "outside the service area".
    """
    zip5 = normalize_zip(zip_code)
    if zip5 is None:
        return None
    record = ZIP_TO_LOCATION.get(zip5)
    if record is not None:
        return record
    return ZIP_PREFIX_TO_LOCATION.get(zip5[:3])


def is_in_service_area_zip(zip_code: object) -> bool:
    zip5 = normalize_zip(zip_code)
    return zip5 is not None and zip5 in SERVICE_AREA_ZIP_CODES


def is_near_service_area(zip_code: object) -> bool:
    """True when the zip's 3-digit prefix falls in the 440-449 region."""
    zip5 = normalize_zip(zip_code)
    return zip5 is not None and zip5[:3] in NEAR_AREA_PREFIXES


def is_county_placeholder(record: ZipRecord) -> bool:
    return record.city.endswith("County")


def zip_coverage(hint: object) -> tuple[bool, bool] | None:
    """``(in_service_area, near_service_area)`` when ``hint`` is a zip code, else None."""
    if not is_valid_zip(hint):
        return None
    return is_in_service_area_zip(hint), is_near_service_area(hint)
