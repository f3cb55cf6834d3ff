RANK_PROMPT = """You are an expert HR recruiter. Please analyze the following CVs against the job description and provide a ranking from 1-100 for each CV, along with detailed explanations, advantages, and disadvantages.

{payload}

Please provide your analysis in the following JSON format:
{{
  "rankings": [
    {{
      "filename": "cv1.pdf",
      "candidateName": "John Doe",
      "phone": "+1-555-123-4567",
      "email": "john.doe@email.com",
      "score": 85,
      "explanation": "Strong technical skills match...",
      "advantages": ["Relevant experience in...", "Strong educational background..."],
      "disadvantages": ["Lacks experience in...", "Could improve..."]
    }}
  ]
}}

IMPORTANT: Extract the candidate's full name, phone number, and email address from each CV. If any information is not available, use "Not provided" for that field.
Use the exact filename shown in parentheses for each CV and return one entry per CV.
"""


GENERATE_PROMPT = """You are an expert CV writer. Generate exactly {count} different CVs that would be strong matches for the following job description. Use the provided base data as a foundation for personal information and experience.

{payload}

IMPORTANT: Generate exactly {count} different CVs, each with unique strengths and approaches. Each CV should be completely different from the others.

Format each CV as a structured document with clear sections and proper formatting:

# [CANDIDATE NAME]
## Personal Information
- Email: [email]
- Phone: [phone]
- Location: [location]
- LinkedIn: [linkedin]

## Professional Summary
[2-3 sentences highlighting key strengths and experience relevant to the job]

## Work Experience
### [Job Title] at [Company] | [Dates]
- [Achievement 1 with metrics]
- [Achievement 2 with metrics]

## Education
### [Degree] in [Field] | [University] | [Year]
- [Relevant coursework or achievements]

## Skills
**Technical Skills:** [List relevant technical skills]
**Soft Skills:** [List relevant soft skills]
**Certifications:** [List relevant certifications]

## Additional Information
- [Any other relevant information]

Return the response in the following JSON format with exactly {count} CVs:
{{
  "cvs": [
    {{
      "title": "CV 1 - [Unique Focus/Approach]",
      "content": "Full CV content with proper formatting as shown above..."
    }},
    {{
      "title": "CV 2 - [Different Focus/Approach]",
      "content": "Full CV content with proper formatting as shown above..."
    }}
  ]
}}
"""
