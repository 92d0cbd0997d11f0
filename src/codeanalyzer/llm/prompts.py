"""LLM prompt templates and placeholder texts for code reviews.

The user prompt asks for a single JSON object with a fixed shape; the
placeholder texts are used whenever no model answer is available.
"""

from codeanalyzer.models.analysis import COMPLEXITY_LEVELS, AnalysisRequest, UiLanguage

SYSTEM_PROMPT = (
    "You are a senior software engineer with more than 15 years of experience in "
    "code reviews, refactoring and software architecture. You always give highly "
    "detailed, technical feedback with concrete examples. You always answer in the "
    "requested JSON format and are extremely specific in your analysis."
)

# Name of each UI language as written in the prompt
RESPONSE_LANGUAGES = {
    UiLanguage.NL: "Dutch",
    UiLanguage.EN: "English",
}

ANALYSIS_PROMPT_TEMPLATE = """
YOU ARE AN EXPERT CODE REVIEWER AND SENIOR SOFTWARE ENGINEER.

# TASK:
Analyze the code below in great detail and give CONCRETE, ACTIONABLE improvements.

# FILE INFORMATION:
- File name: {file_name}
- Programming language: {target_language}
- Code length: {code_length} characters

# CODE TO ANALYZE:
```{target_language}
{code}
```

# ANALYSIS CRITERIA:

## 1. GENERAL CODE QUALITY
- Architecture and structure
- Readability and maintainability
- Code organisation and modularity
- Consistency in code style

## 2. PERFORMANCE
- Algorithmic complexity
- Memory usage
- Database queries (if applicable)
- Loops and iterations

## 3. SECURITY
- Input validation and sanitization
- Authentication and authorization
- Data protection
- Vulnerabilities and risks

## 4. BEST PRACTICES
- Language-specific conventions
- Design patterns
- Error handling
- Code documentation

## 5. SPECIFIC PROBLEMS
- Bugs and logical errors
- Edge cases
- Potential failures
- Compatibility issues

# REQUIRED OUTPUT FORMAT (JSON):

{{
  "improvedCode": "The COMPLETE improved code. Mark every change with a comment.",
  "feedback": {{
    "overall": "Detailed summary of 4-5 sentences on overall quality, main issues and recommendations",
    "strengths": ["at least 5 specific strengths with explanation"],
    "improvements": ["at least 8 concrete improvements", "state exactly what and where to improve", "give examples"],
    "bestPractices": ["at least 5 recommended practices", "specific to {target_language}"],
    "security": ["at least 3 security recommendations", "concrete issues and fixes"],
    "performance": ["at least 3 performance tips", "specific optimisations"]
  }},
  "statistics": {{
    "complexity": "{complexity_levels}",
    "readability": "score 1-10 with explanation",
    "maintainability": "score 1-10 with explanation",
    "efficiency": "score 1-10 with explanation"
  }}
}}

# IMPORTANT:
- Be extremely detailed and specific
- Give concrete examples and code snippets
- Show exactly how the code can be improved
- Refer to line numbers or specific code sections
- Focus on actionable recommendations
- Return ONLY the JSON object

Answer in {response_language}.
"""


def build_analysis_prompt(request: AnalysisRequest) -> str:
    """Build the user prompt for a review request.

    Args:
        request: Analysis request

    Returns:
        Prompt text embedding the code and its metadata
    """
    return ANALYSIS_PROMPT_TEMPLATE.format(
        file_name=request.file_name,
        target_language=request.target_language,
        code_length=len(request.code),
        code=request.code,
        complexity_levels="/".join(COMPLEXITY_LEVELS),
        response_language=RESPONSE_LANGUAGES[request.ui_language],
    )


# =============================================================================
# Placeholder Content
# =============================================================================

PLACEHOLDER_FEEDBACK = {
    UiLanguage.EN: {
        "overall": "This is a demo analysis. Configure Groq API for detailed code reviews.",
        "strengths": [
            "Code structure is readable",
            "Good variable naming",
        ],
        "improvements": [
            "Add error handling",
            "Use const instead of let where possible",
            "Split large functions into smaller ones",
        ],
        "bestPractices": [
            "Add comments for complex logic",
            "Follow consistent code style",
            "Use modern language features",
        ],
        "security": ["Implement input validation"],
        "performance": ["Optimize database queries"],
    },
    UiLanguage.NL: {
        "overall": "Dit is een demo analyse. Configureer Groq API voor gedetailleerde code reviews.",
        "strengths": [
            "Code structuur is leesbaar",
            "Goede variabele namen",
        ],
        "improvements": [
            "Voeg foutafhandeling toe",
            "Gebruik const in plaats van let waar mogelijk",
            "Splits grote functies in kleinere",
        ],
        "bestPractices": [
            "Voeg commentaar toe voor complexe logica",
            "Houd consistente code stijl aan",
            "Gebruik moderne taal features",
        ],
        "security": ["Implementeer input validatie"],
        "performance": ["Optimaliseer database queries"],
    },
}

PLACEHOLDER_STATISTICS = {
    "complexity": "medium",
    "readability": "7",
    "maintainability": "6",
    "efficiency": "5",
}


def get_placeholder_feedback(language: UiLanguage) -> dict:
    """Get placeholder feedback for a UI language.

    Returns a fresh copy so callers may modify it.
    """
    source = PLACEHOLDER_FEEDBACK[language]
    return {
        key: list(value) if isinstance(value, list) else value
        for key, value in source.items()
    }
