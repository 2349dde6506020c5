"""Prompt templates for each generation mode.

Pure string templating. Each ``build_*`` function embeds the description
verbatim and spells out the JSON object the model must return; the field
names match the result models in ``builddost.schemas.generation``.
"""

from builddost.schemas import (
    BackendGenerationRequest,
    CodeOptimizationRequest,
    ComponentGenerationRequest,
    FullStackProjectRequest,
    WebsiteAnalysis,
    WebsiteAnalysisRequest,
)

COMPONENT_SYSTEM_PROMPT = (
    "You are an expert React developer who creates high-quality, production-ready "
    "components. Always respond with valid JSON."
)
BACKEND_SYSTEM_PROMPT = (
    "You are an expert backend developer who creates production-ready APIs. "
    "Always respond with valid JSON."
)
OPTIMIZE_SYSTEM_PROMPT = (
    "You are an expert code optimizer who improves performance, readability, and "
    "maintainability. Always respond with valid JSON."
)
PROJECT_SYSTEM_PROMPT = (
    "You are a senior full-stack developer who creates production-ready applications. "
    "Always respond with valid JSON containing complete, working code."
)
ADAPTIVE_SYSTEM_PROMPT = (
    "You are a senior full-stack developer who creates production-ready, modern web "
    "applications. Generate complete, working code that perfectly matches the analysis. "
    "Always respond with valid JSON."
)
ANALYSIS_SYSTEM_PROMPT = (
    "You are an expert product manager and technical architect who analyzes project "
    "requirements and provides intelligent recommendations for web development. "
    "Always respond with valid JSON."
)

COMPONENT_PROMPT = """Generate a React component based on this description: "{description}"

Requirements:
- Use TypeScript and Tailwind CSS
- Make it responsive and accessible
- Include proper prop types and default values
- Use modern React patterns (functional components with hooks)
- Component type: {type}
- Styling preference: {style}
- Functionality needed: {functionality}

Return a JSON object with this structure:
{{
  "name": "ComponentName",
  "category": "ui|layout|forms|navigation",
  "code": {{
    "jsx": "complete React component code",
    "css": "additional CSS if needed",
    "props": {{"propName": "defaultValue"}}
  }},
  "config": {{
    "props": {{
      "propName": {{
        "type": "string|number|boolean|array|object",
        "default": "defaultValue",
        "required": true/false
      }}
    }},
    "styling": {{
      "colors": ["primary", "secondary"],
      "sizes": ["sm", "md", "lg"],
      "variants": ["default", "outline"]
    }}
  }}
}}"""

BACKEND_PROMPT = """Generate a complete backend API based on this description: "{description}"

Requirements:
- Use Node.js with Express and TypeScript
- Use Drizzle ORM for database operations
- Include proper error handling and validation
- Features needed: {features}
- Include database models: {database}
- Include authentication: {authentication}
- API endpoints: {api_endpoints}

Return a JSON object with this structure:
{{
  "endpoints": [
    {{
      "method": "GET|POST|PUT|DELETE",
      "path": "/api/endpoint",
      "code": "complete endpoint code",
      "description": "what this endpoint does"
    }}
  ],
  "models": [
    {{
      "name": "ModelName",
      "schema": "Drizzle schema definition",
      "relationships": ["relatedModel1", "relatedModel2"]
    }}
  ],
  "middleware": [
    {{
      "name": "middlewareName",
      "code": "middleware code",
      "purpose": "what this middleware does"
    }}
  ],
  "packageDependencies": ["package1", "package2"]
}}"""

OPTIMIZE_PROMPT = """Optimize this {type} code:

```
{code}
```

Focus on these improvements: {improvements}

Return a JSON object with:
{{
  "optimizedCode": "improved code",
  "improvements": ["list of improvements made"]
}}"""

PROJECT_PROMPT = """Generate a complete, production-ready full-stack {type} application \
based on this description: "{description}"

Features to include: {features}

Create a modern application with:

FRONTEND (React + TypeScript + Tailwind CSS):
- Component-based architecture
- Responsive design
- State management
- Form handling and validation
- Error boundaries
- Loading states
- Accessibility features

BACKEND (Express.js + TypeScript):
- RESTful API endpoints
- Middleware stack (CORS, body parser, error handling)
- Input validation with Zod
- Database integration with Drizzle ORM
- Authentication if needed
- Proper error responses

DATABASE (PostgreSQL):
- Normalized schema
- Proper relationships
- Indexes for performance

Provide a complete file structure with all necessary files including:
- package.json files
- TypeScript configs
- Component files
- API route files
- Database schema
- Styling files
- README instructions

Return a JSON object with this exact structure:
{{
  "id": "unique_project_id",
  "name": "Project Name",
  "description": "Project description",
  "files": {{
    "package.json": "frontend package.json content",
    "server/package.json": "backend package.json content",
    "src/App.tsx": "main app component code",
    "src/components/Component.tsx": "component code",
    "server/index.ts": "main server file",
    "server/routes/api.ts": "API routes",
    "shared/schema.ts": "database schema",
    "README.md": "setup instructions"
  }},
  "structure": {{
    "frontend": ["src/", "src/components/", "src/pages/", "src/lib/"],
    "backend": ["server/", "server/routes/", "server/middleware/"],
    "database": ["shared/", "migrations/"]
  }},
  "dependencies": {{
    "frontend": ["react", "typescript", "tailwindcss", "vite"],
    "backend": ["express", "drizzle-orm", "zod", "cors"]
  }}
}}"""

ADAPTIVE_PROJECT_PROMPT = """Generate a complete, production-ready {project_type} application \
based on this intelligent analysis:

Original Request: "{user_input}"
Project Type: {project_type}
Complexity: {complexity}
Suggested Features: {features}
Tech Stack: {tech_stack}

Create a modern, responsive web application that perfectly matches the user's needs with:

FRONTEND (React + TypeScript + Tailwind CSS):
- Modern component architecture
- Responsive design for all devices
- Interactive UI elements
- Form handling and validation
- Loading states and error handling
- Accessibility features (ARIA labels, keyboard navigation)
- {state_management}

BACKEND (Express.js + TypeScript):
- RESTful API endpoints for all features
- Proper middleware stack (CORS, security, validation)
- Input validation with Zod schemas
- {persistence}
- Error handling and logging{authentication}

SPECIFIC FEATURES:
{feature_list}

Return a JSON object with complete working code for all files:
{{
  "id": "unique_project_id",
  "name": "Project Name",
  "description": "Project description",
  "files": {{
    "package.json": "complete package.json with all dependencies",
    "src/App.tsx": "main app component with routing",
    "src/components/[ComponentName].tsx": "all UI components",
    "src/pages/[PageName].tsx": "all page components",
    "server/index.ts": "complete server setup",
    "server/routes/api.ts": "all API endpoints",
    "shared/schema.ts": "database schema if needed",
    "README.md": "setup and usage instructions"
  }},
  "structure": {{
    "frontend": ["src/", "src/components/", "src/pages/", "src/lib/"],
    "backend": ["server/", "server/routes/"],
    "database": ["shared/"]
  }},
  "dependencies": {{
    "frontend": ["list of frontend packages"],
    "backend": ["list of backend packages"]
  }}
}}"""

ANALYSIS_PROMPT = """Analyze this website/app request and provide intelligent recommendations:

User Input: "{user_input}"
Context: {context}
Previous Feedback: {previous_feedback}

Provide a comprehensive analysis to help generate the perfect website. Consider:
- What type of website/app this should be
- Complexity level based on features needed
- Essential features to include
- Best technology stack
- Development timeline
- Recommendations for success

Return a JSON object with this structure:
{{
  "projectType": "e-commerce|portfolio|blog|dashboard|landing-page|social-platform|saas|other",
  "complexity": "simple|moderate|complex",
  "suggestedFeatures": ["feature1", "feature2", "feature3"],
  "techStack": {{
    "frontend": ["react", "tailwindcss", "typescript"],
    "backend": ["express", "node.js"],
    "database": true/false
  }},
  "timeline": "estimated development time",
  "recommendations": ["recommendation1", "recommendation2"]
}}"""


def _yes_no(flag: bool) -> str:
    return "yes" if flag else "no"


def build_component_prompt(request: ComponentGenerationRequest) -> str:
    return COMPONENT_PROMPT.format(
        description=request.description,
        type=request.type or "any",
        style=request.style or "modern and clean",
        functionality=", ".join(request.functionality) or "basic functionality",
    )


def build_backend_prompt(request: BackendGenerationRequest, features: list[str]) -> str:
    """Backend prompt; ``features`` is the resolved list (declared or extracted)."""
    return BACKEND_PROMPT.format(
        description=request.description,
        features=", ".join(features),
        database=_yes_no(request.database),
        authentication=_yes_no(request.authentication),
        api_endpoints=", ".join(request.api_endpoints) or "standard CRUD operations",
    )


def build_optimize_prompt(request: CodeOptimizationRequest) -> str:
    return OPTIMIZE_PROMPT.format(
        type=request.type,
        code=request.code,
        improvements=", ".join(request.improvements),
    )


def build_project_prompt(request: FullStackProjectRequest) -> str:
    return PROJECT_PROMPT.format(
        type=request.type,
        description=request.description,
        features=", ".join(request.features),
    )


def build_analysis_prompt(request: WebsiteAnalysisRequest) -> str:
    return ANALYSIS_PROMPT.format(
        user_input=request.user_input,
        context=request.context or "None",
        previous_feedback=", ".join(request.previous_feedback) or "None",
    )


def build_adaptive_project_prompt(user_input: str, analysis: WebsiteAnalysis) -> str:
    """Project prompt shaped by a prior requirements analysis."""
    features = analysis.suggested_features
    return ADAPTIVE_PROJECT_PROMPT.format(
        user_input=user_input,
        project_type=analysis.project_type,
        complexity=analysis.complexity,
        features=", ".join(features),
        tech_stack=analysis.tech_stack.model_dump_json(),
        state_management=(
            "Advanced state management and routing"
            if analysis.complexity == "complex"
            else "Simple state management"
        ),
        persistence=(
            "PostgreSQL database with Drizzle ORM"
            if analysis.tech_stack.database
            else "In-memory storage"
        ),
        authentication=(
            "\n- User authentication and authorization" if "authentication" in features else ""
        ),
        feature_list="\n".join(f"- {feature}" for feature in features),
    )
