from sqlalchemy.orm import Session

from newsbot.db.database import get_engine, init_db
from newsbot.db.models import ProcessedMarker, utcnow

init_db()
now = utcnow()

with Session(get_engine()) as session:
    total = session.query(ProcessedMarker).count()
    live = session.query(ProcessedMarker).filter(ProcessedMarker.expires_at > now).count()
    print("Markers in DB:", total, "| unexpired:", live)

    rows = (
        session.query(ProcessedMarker)
        .order_by(ProcessedMarker.created_at.desc())
        .limit(5)
        .all()
    )

print("\nLatest 5 markers:")
for r in rows:
    print("-", r.key, "| expires", r.expires_at.isoformat(timespec="minutes"))
