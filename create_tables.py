from app.database import Base, engine
from app.models import (
    auth_user,
    profile,
    category,
    post,
    post_category,
)

print("Creating database tables...")
Base.metadata.create_all(bind=engine)
print("✅ All tables created successfully!")
