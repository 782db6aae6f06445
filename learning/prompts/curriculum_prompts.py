"""
Curriculum Generation Prompt

Asks the model for a nested JSON curriculum with title, description and
children at every level.
"""

from learning.models.session import PersonalizationData
from learning.prompts.templates import PromptTemplate


CURRICULUM_GENERATION_PROMPT = PromptTemplate(
    """You are an expert curriculum designer and teacher. Your task is to create a structured learning curriculum for a student.

Student Profile:
- Name: {name}
- Topic to learn: {topic}
- Background: {background}
- Current knowledge level: {knowledge_level}
- Learning goals: {learning_goals}
- Already knows: {prior_knowledge}

Create a comprehensive curriculum to teach "{topic}" from zero to mastery.

IMPORTANT: You must respond with ONLY a valid JSON object, no markdown, no explanation, no code blocks. The response should be parseable JSON.

The JSON structure must be:
{{
  "title": "Main topic title",
  "description": "Brief description of what will be learned",
  "children": [
    {{
      "title": "Subtopic 1 title",
      "description": "What this subtopic covers",
      "children": [
        {{
          "title": "Sub-subtopic 1.1 title",
          "description": "Specific concept to learn",
          "children": []
        }}
      ]
    }}
  ]
}}

Guidelines for the curriculum:
1. Start from first principles - assume no prior knowledge
2. Build concepts progressively - each topic should build on previous ones
3. Create 4-6 main subtopics at the top level
4. Each subtopic can have 2-4 sub-subtopics
5. Sub-subtopics can have 1-3 deeper topics if needed
6. Keep titles concise but descriptive
7. Descriptions should explain what the learner will understand after completing that section
8. Order topics from foundational to advanced
9. Consider the student's background and goals when structuring the curriculum
10. Skip or shorten topics the student already knows

Remember: Return ONLY valid JSON, nothing else.""",
    name="curriculum_generation",
)


def build_curriculum_prompt(personalization: PersonalizationData) -> str:
    return CURRICULUM_GENERATION_PROMPT.render(
        name=personalization.name or "the student",
        topic=personalization.topic,
        background=personalization.background or "Not specified",
        knowledge_level=personalization.knowledge_level,
        learning_goals=personalization.learning_goals or "Not specified",
        prior_knowledge=personalization.prior_knowledge or "Nothing specified",
    )
