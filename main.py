from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import RedirectResponse

from config import CORS_ORIGINS
from database.conexion import Base, engine
import models  # registers every table on Base.metadata
from utils.dependencies import PageRedirect
from utils.logging_utils import log_error
from utils.rate_limiter import setup_rate_limiting

try:
    Base.metadata.create_all(bind=engine)
except Exception as e:
    log_error("startup", "system", "Table creation failed", str(e))
    raise

app = FastAPI(title="Hotel back office")

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

setup_rate_limiting(app)


@app.exception_handler(PageRedirect)
async def page_redirect_handler(request: Request, exc: PageRedirect):
    return RedirectResponse(url=exc.location, status_code=status.HTTP_303_SEE_OTHER)


from endpoints import auth, dashboard, guests, rooms, bookings, staff, admin
app.include_router(auth.router)
app.include_router(dashboard.router)
app.include_router(guests.router)
app.include_router(rooms.router)
app.include_router(bookings.router)
app.include_router(staff.router)
app.include_router(admin.router)


@app.get("/")
def read_root():
    return RedirectResponse(url="/dashboard", status_code=status.HTTP_303_SEE_OTHER)
