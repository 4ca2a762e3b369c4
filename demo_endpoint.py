"""
Quick demo script to run the Content Publishing API locally.

This script starts a local server and shows how to make requests to the endpoints.
"""

import uvicorn

if __name__ == "__main__":
    print("=" * 60)
    print("Starting Content Publishing API Demo")
    print("=" * 60)
    print()
    print("📌 API Endpoints:")
    print("   - Health Check:  GET  http://localhost:8000/health")
    print("   - Register:      POST http://localhost:8000/api/auth/register")
    print("   - Login:         POST http://localhost:8000/api/auth/login")
    print("   - Articles:      GET  http://localhost:8000/api/articles")
    print("   - Authors:       GET  http://localhost:8000/api/authors")
    print("   - Categories:    GET  http://localhost:8000/api/categories")
    print("   - API Docs:           http://localhost:8000/docs")
    print()
    print("🔐 Authentication:")
    print("   POST/PUT on authors, categories and articles require:")
    print("   Authorization: Bearer <token from /api/auth/login>")
    print()
    print("📝 Test with curl:")
    print('   curl -X POST "http://localhost:8000/api/auth/register" \\')
    print('     -H "Content-Type: application/json" \\')
    print('     -d \'{"name":"Alice","email":"a@x.com","password":"abcdef","confirmPassword":"abcdef"}\'')
    print()
    print("=" * 60)
    print("Starting server on http://localhost:8000")
    print("Press Ctrl+C to stop")
    print("=" * 60)
    print()

    uvicorn.run(
        "content_api.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level="info"
    )
