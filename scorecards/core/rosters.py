"""Per-session check-in rosters."""

from collections import defaultdict
from dataclasses import dataclass, field

from .models import ClimberRecord
from .ordering import roster_sort_key, session_number


ROSTER_HEADER = ['Name', 'Category', 'Session', 'Bib #', 'Checked In']


@dataclass
class CheckInRoster:
    session: str
    rows: list = field(default_factory=list)
    header: list = field(default_factory=lambda: list(ROSTER_HEADER))

    @property
    def title(self) -> str:
        return f'Session {self.session} Check-in List'


def build_rosters(climbers: list[ClimberRecord]) -> list[CheckInRoster]:
    """Group climbers by session, one roster per session.

    Sessions are ordered by numeric value. Within a session climbers are
    listed by category, then last name. The "Checked In" column is left
    blank for marking by hand at the desk.
    """
    groups = defaultdict(list)
    for climber in climbers:
        groups[climber.session].append(climber)

    sessions = sorted(groups, key=lambda s: (session_number(s), s))

    rosters = []
    for session in sessions:
        roster = CheckInRoster(session=session)
        for climber in sorted(groups[session], key=roster_sort_key):
            roster.rows.append([
                climber.full_name,
                climber.category,
                climber.session,
                climber.bib,
                '',
            ])
        rosters.append(roster)
    return rosters
