import uvicorn
from school_directory import create_app

# Create the FastAPI app using the create_app function
app = create_app()


# Add an endpoint to list all routes (endpoints)
@app.get("/list-endpoints")
def list_endpoints():
    endpoints = []
    for route in app.router.routes:
        endpoints.append({
            "path": route.path,
            "name": route.name,
            "methods": sorted(getattr(route, "methods", None) or [])
        })
    return {"endpoints": endpoints}


def main():
    uvicorn.run("school_directory.run:app", host="0.0.0.0", port=8000, reload=True)


if __name__ == "__main__":
    main()
