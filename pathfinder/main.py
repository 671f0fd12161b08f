## Main application entry point

from fastapi import FastAPI

from pathfinder.profiles.routes import router as profiles_router

app = FastAPI(title="Pathfinder")


@app.get("/health")
async def health():
    return {"ok": True}


app.include_router(profiles_router)
